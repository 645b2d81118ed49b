from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.features.properties.schemas.property import PropertyResponse


class HomeSection(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    image: Optional[str] = None
    order: int = 0


class Testimonial(BaseModel):
    name: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)
    rating: Optional[int] = Field(None, ge=1, le=5)
    image: Optional[str] = None


class HomeStat(BaseModel):
    label: str = Field(..., min_length=1)
    value: str = Field(..., min_length=1)
    icon: Optional[str] = None


class TeamMember(BaseModel):
    name: str = Field(..., min_length=1)
    position: str = Field(..., min_length=1)
    bio: Optional[str] = None
    image: Optional[str] = None


class CompanyStat(BaseModel):
    label: str = Field(..., min_length=1)
    value: str = Field(..., min_length=1)


class HomeUpdateRequest(BaseModel):
    """Partial update: only the fields sent are changed."""

    hero_title: Optional[str] = Field(None, min_length=1, max_length=200)
    hero_subtitle: Optional[str] = Field(None, max_length=300)
    hero_description: Optional[str] = Field(None, max_length=1000)
    hero_image: Optional[str] = None
    hero_cta_text: Optional[str] = Field(None, max_length=50)
    hero_cta_link: Optional[str] = None
    featured_property_ids: Optional[List[str]] = None
    sections: Optional[List[HomeSection]] = None
    testimonials: Optional[List[Testimonial]] = None
    stats: Optional[List[HomeStat]] = None

    @field_validator("hero_title")
    @classmethod
    def hero_title_required(cls, value: Optional[str]) -> str:
        if value is None or not value.strip():
            raise ValueError("Hero title is required")
        return value.strip()


class AboutUpdateRequest(BaseModel):
    """Partial update: only the fields sent are changed."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    subtitle: Optional[str] = Field(None, max_length=300)
    description: Optional[str] = Field(None, min_length=1, max_length=5000)
    mission: Optional[str] = Field(None, max_length=1000)
    vision: Optional[str] = Field(None, max_length=1000)
    values: Optional[List[str]] = None
    team_members: Optional[List[TeamMember]] = None
    company_stats: Optional[List[CompanyStat]] = None
    images: Optional[List[str]] = None

    @field_validator("title", "description")
    @classmethod
    def required_text(cls, value: Optional[str]) -> str:
        if value is None or not value.strip():
            raise ValueError("Field is required")
        return value.strip()


class HomeResponse(BaseModel):
    id: str
    hero_title: str
    hero_subtitle: Optional[str] = None
    hero_description: Optional[str] = None
    hero_image: Optional[str] = None
    hero_cta_text: Optional[str] = None
    hero_cta_link: Optional[str] = None
    featured_property_ids: List[str] = []
    featured_properties: List[PropertyResponse] = []
    sections: List[HomeSection] = []
    testimonials: List[Testimonial] = []
    stats: List[HomeStat] = []
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AboutResponse(BaseModel):
    id: str
    title: str
    subtitle: Optional[str] = None
    description: str
    mission: Optional[str] = None
    vision: Optional[str] = None
    values: List[str] = []
    team_members: List[TeamMember] = []
    company_stats: List[CompanyStat] = []
    images: List[str] = []
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
