import logging
from typing import Optional

from supabase import AsyncClient, acreate_client

from . import config

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Owns the Supabase connection handed to the repository and uploader."""

    def __init__(self, supabase: AsyncClient):
        self.supabase = supabase

    @classmethod
    async def connect(cls, url: Optional[str] = None, key: Optional[str] = None) -> "DatabaseManager":
        """
        Create the Supabase client from explicit credentials or the environment.

        Raises:
            ValueError: if the URL or key is missing
        """
        url = url or config.SUPABASE_URL
        key = key or config.SUPABASE_KEY

        if not url or not key:
            raise ValueError("Missing Supabase credentials in environment variables")

        supabase = await acreate_client(url, key)
        logger.info(f"Connected to Supabase at {url}")
        return cls(supabase)

    @property
    def storage(self):
        return self.supabase.storage

    @property
    def auth(self):
        return self.supabase.auth
