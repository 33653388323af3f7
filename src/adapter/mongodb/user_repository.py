"""MongoDB implementation of UserRepository."""

from logging import getLogger
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError, StoreError
from domain.model.user import User, to_store_precision

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        try:
            self.collection.create_index([('username', 1)], name='idx_users_username', unique=True)
            self.collection.create_index([('date_joined', -1)], name='idx_users_date_joined')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            username=doc['username'],
            password_hash=doc['password_hash'],
            date_joined=to_store_precision(doc['date_joined']),
            biography=doc.get('biography'),
        )

    def _to_document(self, user: User) -> dict:
        doc = {
            '_id': user.id,
            'username': user.username,
            'password_hash': user.password_hash,
            'date_joined': user.date_joined,
        }
        if user.biography is not None:
            doc['biography'] = user.biography
        return doc

    def find_one(self, username: str) -> User | None:
        try:
            doc = self.collection.find_one({'username': username})
        except PyMongoError as e:
            logger.error("Failed to get user by username", extra={"username": username, "error": str(e)})
            raise StoreError(str(e)) from e
        return self._to_domain(doc) if doc else None

    def insert(self, user: User) -> User:
        try:
            self.collection.insert_one(self._to_document(user))
        except DuplicateKeyError as e:
            logger.warning("User creation failed: username already exists", extra={"username": user.username})
            raise DuplicateError("Username already exists") from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"username": user.username, "error": str(e)})
            raise StoreError(str(e)) from e

        logger.info("User created", extra={"userId": user.id, "username": user.username})
        return user

    def find_one_and_update(self, username: str, fields: dict) -> User | None:
        try:
            doc = self.collection.find_one_and_update(
                {'username': username},
                {'$set': fields},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"username": username, "error": str(e)})
            raise StoreError(str(e)) from e

        if not doc:
            return None
        logger.debug("User updated", extra={"username": username, "fields": sorted(fields)})
        return self._to_domain(doc)

    def find_one_and_delete(self, username: str) -> User | None:
        try:
            doc = self.collection.find_one_and_delete({'username': username})
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"username": username, "error": str(e)})
            raise StoreError(str(e)) from e

        if not doc:
            return None
        logger.info("User deleted", extra={"userId": doc['_id'], "username": username})
        return self._to_domain(doc)
