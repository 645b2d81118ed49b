from sqlalchemy import JSON, Column, String, Text

from app.platform.db.base import BaseModel

DEFAULT_HERO_TITLE = "Welcome to Our Rental Company"
DEFAULT_HERO_SUBTITLE = "Find Your Perfect Property"
DEFAULT_ABOUT_TITLE = "About Our Company"
DEFAULT_ABOUT_DESCRIPTION = "Welcome to our rental company."


class HomeContent(BaseModel):
    """Landing page copy. There is at most one row."""

    __tablename__ = "home_content"

    hero_title = Column(String(200), nullable=False, default=DEFAULT_HERO_TITLE)
    hero_subtitle = Column(String(300), nullable=True, default=DEFAULT_HERO_SUBTITLE)
    hero_description = Column(String(1000), nullable=True)
    hero_image = Column(String(500), nullable=True)
    hero_cta_text = Column(String(50), nullable=True)
    hero_cta_link = Column(String(500), nullable=True)
    featured_property_ids = Column(JSON, default=list, nullable=False)
    sections = Column(JSON, default=list, nullable=False)
    testimonials = Column(JSON, default=list, nullable=False)
    stats = Column(JSON, default=list, nullable=False)


class AboutContent(BaseModel):
    """About page copy. There is at most one row."""

    __tablename__ = "about_content"

    title = Column(String(200), nullable=False, default=DEFAULT_ABOUT_TITLE)
    subtitle = Column(String(300), nullable=True)
    description = Column(Text, nullable=False, default=DEFAULT_ABOUT_DESCRIPTION)
    mission = Column(String(1000), nullable=True)
    vision = Column(String(1000), nullable=True)
    values = Column(JSON, default=list, nullable=False)
    team_members = Column(JSON, default=list, nullable=False)
    company_stats = Column(JSON, default=list, nullable=False)
    images = Column(JSON, default=list, nullable=False)
