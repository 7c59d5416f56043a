"""
Repository modules for database access.

`records` holds the generic record store and its three kinds; `categories`
holds the company/industry lookup-or-create used while inserting.
"""
