"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
`CrudRepository` runs the statements; concrete repositories declare the SQL,
bind entity fields into parameters and decode rows back into domain objects.
"""
