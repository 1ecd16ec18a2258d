"""Editable static catalog and export text configuration."""

from __future__ import annotations

CODE_COLUMN = "Product Code"
DESCRIPTION_COLUMN = "Product Description"
NAME_COLUMN = "Product Name"

# Rows for the offline catalog variant, same shape as the published sheet.
MOCK_CATALOG_ROWS: list[dict[str, str | None]] = [
    {"code": "001", "description": "Toy Car", "name": "Racer"},
    {"code": "002", "description": "Building Blocks 120pc", "name": "Blocks"},
    {"code": "003", "description": "Plush Bear Small", "name": None},
    {"code": "004", "description": "Plush Bear Large", "name": None},
    {"code": "005", "description": "Puzzle 500pc", "name": "Puzzle"},
    {"code": "006", "description": "Wooden Train Set", "name": "Train"},
    {"code": "007", "description": "Crayons 24 Colours", "name": None},
    {"code": "008", "description": "Skipping Rope", "name": None},
    {"code": "009", "description": "Kite Delta", "name": "Kite"},
    {"code": "010", "description": "Spinning Top", "name": None},
]

CSV_HEADER = ("Code", "Description", "Quantity")
STORE_LABEL = "Store:"
VAT_LABEL = "VAT:"
NOTES_LABEL = "Notes:"
LATITUDE_LABEL = "Latitude:"
LONGITUDE_LABEL = "Longitude:"
EMPTY_FIELD_TEXT = "N/A"
NO_LOCATION_TEXT = "Not available"

SHARE_TITLE = "Order Export"
SHARE_MESSAGE = "Here is the order export:"
