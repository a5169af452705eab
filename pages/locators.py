"""
Locator Utilities - shared selectors and Playwright locator conversion.
Kept apart from the page objects to prevent circular imports.
"""

from __future__ import annotations

import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

# Selectors shared across multiple pages
COMMON_SELECTORS = {
    # Navigation
    "elements_card": 'div.card:has-text("Elements")',
    "main_header": ".main-header",
    # Form elements
    "validation_error": ".field-error",
}


def convert_to_playwright_locator(page: Any, selector: str) -> Any:
    """
    Convert selector strings to proper Playwright locators using best practices.

    Supports:
    - Standard CSS selectors (passed through)
    - XPath selectors (prefixed with xpath=)
    - text='...' → get_by_text()
    - span:has-text('text') → locator('span').filter(has_text='text')

    Returns a Playwright locator object.
    """
    selector = selector.strip()

    # e.g., "text='Web Tables'" → get_by_text('Web Tables')
    text_match = re.match(r"^text=['\"](.+?)['\"]\s*$", selector)
    if text_match:
        text_content = text_match.group(1)
        logger.debug(f"Converting text= selector to get_by_text: {text_content}")
        return page.get_by_text(text_content, exact=False)

    # e.g., 'div.card:has-text("Elements")' → locator('div.card').filter(has_text='Elements')
    has_text_match = re.match(r"^(.+?):has-text\(['\"](.+?)['\"]\s*\)$", selector)
    if has_text_match:
        base_selector = has_text_match.group(1).strip()
        text_content = has_text_match.group(2)
        logger.debug(f"Converting :has-text() to locator().filter(): base={base_selector}, text={text_content}")
        return page.locator(base_selector).filter(has_text=text_content)

    if selector.startswith("//") or selector.startswith(".//"):
        selector = f"xpath={selector}"

    return page.locator(selector)


def by_test_id(test_id: str) -> str:
    if not test_id:
        raise ValueError("test_id parameter is required")
    return f'[data-testid="{test_id}"]'


def by_text(tag: str, text: str) -> str:
    if not tag or not text:
        raise ValueError("Both tag and text parameters are required")
    return f'{tag}:has-text("{text}")'


def nth_child(selector: str, index: int) -> str:
    """Zero-based index → CSS :nth-child (which is 1-based)."""
    if not selector:
        raise ValueError("selector parameter is required")
    if index < 0:
        raise ValueError("index must be non-negative")
    return f"{selector}:nth-child({index + 1})"


def by_aria_label(label: str) -> str:
    if not label:
        raise ValueError("label parameter is required")
    return f'[aria-label="{label}"]'


def by_role(role: str, name: str | None = None) -> str:
    if not role:
        raise ValueError("role parameter is required")
    return f'role={role}[name="{name}"]' if name else f"role={role}"


def by_title(title: str) -> str:
    if not title:
        raise ValueError("title parameter is required")
    return f'[title="{title}"]'


def combine(*selectors: str) -> str:
    if not selectors:
        raise ValueError("At least one selector is required")
    return " ".join(selectors)
