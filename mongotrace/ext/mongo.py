SERVICE = "mongodb"
COLLECTION = "db.mongodb.collection"
