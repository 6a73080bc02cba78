"""
db/ - Database Layer
====================
Opens PostgreSQL connections, scopes transactions and creates the schema.
The repositories receive a connection from here and never manage it themselves.
"""
