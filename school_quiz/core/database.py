# school_quiz/core/database.py
import json
import logging
from typing import Dict, Any, Optional

import pymongo
from pymongo.errors import PyMongoError

from .config import config
from .exceptions import PersistenceError

logger = logging.getLogger(__name__)

class DocumentStore:
    """Key/value store of whole JSON documents"""

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, document: Any) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError

    def validate_connection(self) -> Dict[str, Any]:
        return {"overall": True, "mode": "unknown"}

    def close(self):
        pass

class MongoDocumentStore(DocumentStore):
    """Document store backed by one MongoDB collection, one document per key"""

    def __init__(self, client: Optional[pymongo.MongoClient] = None):
        logger.info("🔄 Initializing MongoDB document store")

        try:
            self.mongo_client = client or pymongo.MongoClient(
                config.MONGO_CONNECTION_STRING,
                serverSelectionTimeoutMS=config.MONGO_TIMEOUT_MS,
                maxPoolSize=10,
                minPoolSize=1,
                maxIdleTimeMS=30000,
                waitQueueTimeoutMS=5000
            )
            self.db = self.mongo_client[config.MONGO_DB_NAME]
            self.collection = self.db[config.DOCUMENT_COLLECTION]
        except PyMongoError as e:
            logger.error(f"❌ MongoDB client creation failed: {e}")
            raise PersistenceError(f"MongoDB connection failure: {e}") from e

        logger.info(f"✅ MongoDB document store ready: {config.MONGO_DB_NAME}.{config.DOCUMENT_COLLECTION}")

    def get(self, key: str) -> Optional[Any]:
        try:
            doc = self.collection.find_one({"_id": key})
        except PyMongoError as e:
            logger.error(f"❌ Failed to read '{key}': {e}")
            raise PersistenceError(f"Failed to read '{key}': {e}") from e

        if doc is None:
            return None
        return doc.get("value")

    def set(self, key: str, document: Any) -> None:
        try:
            self.collection.replace_one(
                {"_id": key},
                {"_id": key, "value": document},
                upsert=True
            )
        except PyMongoError as e:
            logger.error(f"❌ Failed to write '{key}': {e}")
            raise PersistenceError(f"Failed to write '{key}': {e}") from e

    def remove(self, key: str) -> None:
        try:
            self.collection.delete_one({"_id": key})
        except PyMongoError as e:
            logger.error(f"❌ Failed to remove '{key}': {e}")
            raise PersistenceError(f"Failed to remove '{key}': {e}") from e

    def validate_connection(self) -> Dict[str, Any]:
        """Ping MongoDB and report status"""
        status = {"mongodb": False, "overall": False, "mode": "mongodb"}

        try:
            self.mongo_client.admin.command('ping')
            status["mongodb"] = True
            status["overall"] = True
        except PyMongoError as e:
            logger.error(f"❌ MongoDB validation failed: {e}")
            status["error"] = str(e)

        return status

    def close(self):
        if self.mongo_client:
            self.mongo_client.close()
            logger.info("✅ MongoDB connection closed")

class InMemoryDocumentStore(DocumentStore):
    """Process-local store; values are kept serialized so callers never share state"""

    def __init__(self):
        self._documents: Dict[str, str] = {}

    def get(self, key: str) -> Optional[Any]:
        raw = self._documents.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, document: Any) -> None:
        self._documents[key] = json.dumps(document)

    def remove(self, key: str) -> None:
        self._documents.pop(key, None)

    def validate_connection(self) -> Dict[str, Any]:
        return {"overall": True, "mode": "memory", "keys": len(self._documents)}

# Singleton pattern for document store
_document_store = None

def get_document_store() -> DocumentStore:
    """Get document store instance (singleton)"""
    global _document_store
    if _document_store is None:
        if config.USE_DUMMY_DATA:
            logger.info("🔧 Document store in dummy mode - using in-memory storage")
            _document_store = InMemoryDocumentStore()
        else:
            _document_store = MongoDocumentStore()
    return _document_store

def close_document_store():
    """Close document store instance"""
    global _document_store
    if _document_store:
        _document_store.close()
        _document_store = None
