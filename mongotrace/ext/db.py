# tags for common database attributes
SYSTEM = "db.system"
NAME = "db.name"
STATEMENT = "db.statement"
