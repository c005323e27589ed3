"""
store.py
--------
MongoDB wrapper holding the latest space news snapshot.

The store keeps at most one live snapshot: every run clears all
collections, then writes the new snapshot to spaceNews/latest.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from spacenews.config import SNAPSHOT_COLLECTION, SNAPSHOT_DOC_ID, Settings
from spacenews.errors import StoreError
from spacenews.models import AggregatedSnapshot

logger = logging.getLogger(__name__)


class SnapshotStore:
    def __init__(self, db: Database, collection: str = SNAPSHOT_COLLECTION,
                 doc_id: str = SNAPSHOT_DOC_ID):
        self.db = db
        self.collection = collection
        self.doc_id = doc_id

    def clear_all(self) -> None:
        """Delete every document in every collection, one batch per collection."""
        try:
            for name in self.db.list_collection_names():
                coll = self.db[name]
                ids = [doc["_id"] for doc in coll.find({}, {"_id": 1})]
                if ids:
                    coll.delete_many({"_id": {"$in": ids}})
                logger.info(f"Cleared collection: {name}")
        except PyMongoError as e:
            raise StoreError("clear", e) from e

    def write_snapshot(self, snapshot: AggregatedSnapshot) -> None:
        """Overwrite the singleton snapshot document."""
        doc = snapshot.to_document()
        try:
            self.db[self.collection].replace_one({"_id": self.doc_id}, doc, upsert=True)
        except PyMongoError as e:
            raise StoreError("write", e) from e

    def read_snapshot(self) -> Optional[Dict[str, Any]]:
        try:
            doc = self.db[self.collection].find_one({"_id": self.doc_id})
        except PyMongoError as e:
            raise StoreError("read", e) from e
        if doc is None:
            return None
        doc.pop("_id", None)
        return doc

    def list_documents(self) -> Dict[str, List[Dict[str, Any]]]:
        """All documents grouped by collection name."""
        try:
            return {name: list(self.db[name].find({}))
                    for name in self.db.list_collection_names()}
        except PyMongoError as e:
            raise StoreError("list", e) from e


def _client_from_settings(settings: Settings):
    """Return (client, database name) from the credential file or ambient config."""
    path = settings.store_credentials_path
    if path:
        with open(path, "r", encoding="utf-8") as f:
            creds = json.load(f)
        logger.info(f"Store client initialized with credential file {path}.")
        return MongoClient(creds["uri"]), creds.get("database", settings.mongo_database)

    logger.warning("No store credential file provided. Using default connection settings.")
    return MongoClient(settings.mongo_url), settings.mongo_database


def connect_store(settings: Settings, client: Optional[MongoClient] = None) -> SnapshotStore:
    """Create the process-wide SnapshotStore. Call once at startup."""
    if client is None:
        client, db_name = _client_from_settings(settings)
    else:
        db_name = settings.mongo_database
    return SnapshotStore(client[db_name])
