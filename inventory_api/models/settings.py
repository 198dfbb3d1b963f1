from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field
from inventory_api.models.base import MongoModel, utcnow

class ThemeMode(str, Enum):
    LIGHT = "light"
    DARK = "dark"

class PageSize(str, Enum):
    A4 = "A4"
    LETTER = "Letter"

class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class PdfSettings(BaseModel):
    footer_text: str = ""
    page_size: PageSize = PageSize.A4
    orientation: Orientation = Orientation.PORTRAIT


class BusinessSettings(MongoModel):
    """
    Singleton document holding business branding and PDF formatting.
    """
    business_name: str = "My Business"
    business_logo_url: str = ""
    business_address: str = ""
    theme_mode: ThemeMode = ThemeMode.LIGHT
    pdf_settings: PdfSettings = Field(default_factory=PdfSettings)

    updated_at: datetime = Field(default_factory=utcnow)


class PdfSettingsUpdate(BaseModel):
    footer_text: Optional[str] = None
    page_size: Optional[PageSize] = None
    orientation: Optional[Orientation] = None


class SettingsUpdate(BaseModel):
    business_name: Optional[str] = Field(None, min_length=1)
    business_logo_url: Optional[str] = None
    business_address: Optional[str] = None
    theme_mode: Optional[ThemeMode] = None
    pdf_settings: Optional[PdfSettingsUpdate] = None
