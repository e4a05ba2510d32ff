"""
Common Pydantic schemas and mixins.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict


class TimestampMixin(BaseModel):
    """Mixin for created/updated timestamps."""
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
