"""
Tienda API: Schema Catalog Schemas
==================================

What:  Response models for the introspection endpoints.
Why:   Field names follow information_schema (table_name, column_name,
       data_type, is_nullable, column_default) so clients that used to read
       those views directly see the same keys.
"""

from typing import Optional

from pydantic import BaseModel, Field


class TableInfo(BaseModel):
    table_name: str


class ColumnInfo(BaseModel):
    column_name: str
    data_type: str = Field(description="Declared type as reported by the store")
    is_nullable: str = Field(description="'YES' or 'NO'")
    column_default: Optional[str] = Field(
        default=None,
        description="Default expression, null when the column has none",
    )
