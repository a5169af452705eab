from __future__ import annotations

from pages.radio_button import RadioButtonPage
from pages.table_state import Row, TableSelectors, TableStateReader
from pages.text_box import TextBoxPage
from pages.web_table import WebTablePage

__all__ = ["RadioButtonPage", "Row", "TableSelectors", "TableStateReader", "TextBoxPage", "WebTablePage"]
