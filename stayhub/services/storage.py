"""
Public URLs for objects in the property image bucket.
Uploads are out of scope; images are stored and served as URLs.
"""

from datetime import datetime, timezone
from typing import Optional
from stayhub.config import settings
import re
import uuid


class StorageService:
    """
    Builds object names and public URLs for the image bucket.
    """

    def __init__(self, public_base_url: Optional[str] = None, bucket: Optional[str] = None):
        self.public_base_url = (public_base_url or settings.storage_public_url).rstrip("/")
        self.bucket = bucket or settings.storage_bucket

    @staticmethod
    def is_absolute_url(path: str) -> bool:
        return path.startswith("http://") or path.startswith("https://")

    def object_name(self, property_id: uuid.UUID, filename: str, timestamp: Optional[datetime] = None) -> str:
        """
        Object name for an uploaded image: <property_id>/<epoch millis>-<filename>.
        Uploads happen outside this service; upload tooling uses this to place
        objects where public_url resolves them.
        """
        moment = timestamp or datetime.now(timezone.utc)
        millis = int(moment.timestamp() * 1000)
        safe_name = re.sub(r"[^A-Za-z0-9._-]", "_", filename.split("/")[-1])
        return f"{property_id}/{millis}-{safe_name}"

    def public_url(self, path: str) -> str:
        """
        Public URL of an object; absolute URLs and site-relative paths pass through.
        """
        if not path or self.is_absolute_url(path) or path.startswith("/"):
            return path
        return f"{self.public_base_url}/{self.bucket}/{path}"
