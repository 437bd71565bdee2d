"""
🔌 Database Connection Setup - MongoDB

Conexión centralizada a MongoDB, compartida por la API y el script de CI
"""

import asyncio
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

LEADERBOARD_COLLECTION = "leaderboard"


class Database:
    """Singleton para la conexión a MongoDB"""

    client: Optional[AsyncIOMotorClient] = None
    db: Optional[AsyncIOMotorDatabase] = None

    @classmethod
    async def connect(cls, mongodb_uri: str, db_name: str, timeout_seconds: float = 5.0):
        """Conecta a MongoDB con timeouts acotados"""
        if cls.client is None:
            if not mongodb_uri:
                raise ValueError("MONGODB_URI not configured")

            timeout_ms = int(timeout_seconds * 1000)
            cls.client = AsyncIOMotorClient(
                mongodb_uri,
                serverSelectionTimeoutMS=timeout_ms,
                connectTimeoutMS=timeout_ms,
                socketTimeoutMS=timeout_ms,
                connect=False,  # Sin I/O hasta la primera query
            )
            cls.db = cls.client[db_name]
            logger.info(f"✅ MongoDB client ready: {db_name}")

    @classmethod
    async def disconnect(cls):
        """Cierra la conexión"""
        if cls.client is not None:
            cls.client.close()
            cls.client = None
            cls.db = None
            logger.info("❌ Disconnected from MongoDB")

    @classmethod
    async def ping(cls, timeout_seconds: float = 2.0) -> bool:
        """
        Test de conexión real contra el servidor.

        El cliente se crea sin conectar, así que tener cls.db no alcanza
        para saber si MongoDB responde.
        """
        if cls.db is None:
            return False

        try:
            await asyncio.wait_for(cls.db.command("ping"), timeout=timeout_seconds)
        except (PyMongoError, asyncio.TimeoutError) as e:
            logger.warning(f"⚠️ MongoDB ping failed: {e}")
            return False
        return True

    @classmethod
    def get_db(cls) -> AsyncIOMotorDatabase:
        """Retorna la instancia de la base de datos"""
        if cls.db is None:
            raise RuntimeError("Database not connected. Call Database.connect() first.")
        return cls.db


# ============================================
# 🎯 DEPENDENCY para FastAPI
# ============================================

async def get_database() -> AsyncIOMotorDatabase:
    """FastAPI dependency para inyectar la DB"""
    return Database.get_db()
