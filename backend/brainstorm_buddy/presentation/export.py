"""
Plain-text / markdown rendering of a StrategyResult.

Used for "Copy Section", "Copy All" and the strategy.md download. Field titles
come from the camelCase wire names, e.g. targetUsers -> "Target Users".
"""

import re
from typing import Optional

from brainstorm_buddy.strategy.prompts import DEFAULT_MARKET
from brainstorm_buddy.strategy.schemas import StrategyResult, StrategySection

EXPORT_FILENAME = "strategy.md"
SECTION_RULE = "-" * 16

# (attribute, export header, display title)
SECTIONS = (
    ("gtm_strategy", "📈 GTM Strategy", "GTM Strategy"),
    ("feature_roadmap", "🧩 Feature Roadmap", "Feature Roadmap"),
    ("swot_analysis", "🔍 SWOT Analysis", "SWOT Analysis"),
)


def to_title_case(name: str) -> str:
    spaced = re.sub(r"([A-Z])", r" \1", name)
    return spaced[:1].upper() + spaced[1:]


def section_fields(section: StrategySection) -> list[tuple[str, str]]:
    """(title, value) pairs in schema order."""
    return [(to_title_case(key), value) for key, value in section.model_dump(by_alias=True).items()]


def format_section_text(section: StrategySection) -> str:
    return "\n\n".join(f"{title}:\n{value}" for title, value in section_fields(section))


def full_strategy_text(startup_idea: str, market: Optional[str], result: StrategyResult) -> str:
    text = f"Startup Idea: {startup_idea}\nMarket: {market or DEFAULT_MARKET}\n\n"
    blocks = [
        f"{header}\n{SECTION_RULE}\n{format_section_text(getattr(result, attr))}"
        for attr, header, _ in SECTIONS
    ]
    return text + "\n\n".join(blocks)
