"""Category model for the category registry."""

from pydantic import BaseModel, ConfigDict, Field


class Category(BaseModel):
    """
    One income or expense category.

    The value is what gets stored on a transaction; the label is what the
    user sees. Color is a hex string, icon is a Feather icon name.
    """
    model_config = ConfigDict(frozen=True)

    label: str = Field(..., min_length=1)
    value: str = Field(..., min_length=1)
    color: str = Field(..., pattern="^#[0-9a-fA-F]{6}$")
    icon: str = Field(..., min_length=1)
