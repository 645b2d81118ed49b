"""Imports every model so ``Base.metadata`` knows all tables."""

from app.features.admin.models.admin import Admin  # noqa: F401
from app.features.contact.models.contact import Contact  # noqa: F401
from app.features.content.models.content import AboutContent, HomeContent  # noqa: F401
from app.features.properties.models.property import Property  # noqa: F401
from app.platform.db.base import Base

metadata = Base.metadata
