from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Optional

IDEA_MIN_LENGTH = 10
IDEA_MAX_LENGTH = 500

# Shown in the market picker. Never validated against.
MARKETS = (
    "AI", "SaaS", "E-commerce", "Health", "Education", "FinTech",
    "Gaming", "Creator Economy", "Marketplace", "Developer Tools",
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StrategyRequest(CamelModel):
    startup_idea: str = Field(
        ..., min_length=IDEA_MIN_LENGTH, max_length=IDEA_MAX_LENGTH,
        description="A one-line description of the startup idea.",
    )
    market: Optional[str] = Field(None, description="Optional: The market the startup is in.")

    @field_validator("market", mode="before")
    @classmethod
    def blank_market_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class StrategySection(CamelModel):
    """A section of the result: named fields of free text, all non-empty."""

    @model_validator(mode="after")
    def no_empty_fields(self):
        empty = [
            type(self).model_fields[name].alias or name
            for name, value in self
            if not isinstance(value, str) or not value.strip()
        ]
        if empty:
            raise ValueError(f"Empty field(s) in model output: {', '.join(empty)}")
        return self


class GTMStrategy(StrategySection):
    target_users: str = Field(..., description="Description of the target users.")
    acquisition_channels: str = Field(..., description="List of acquisition channels.")
    monetization_model: str = Field(..., description="Description of the monetization model.")
    positioning_statement: str = Field(..., description="The positioning statement.")


class FeatureRoadmap(StrategySection):
    mvp_features: str = Field(..., description="List of MVP features.")
    v1_improvements: str = Field(..., description="List of v1.0 improvements.")
    stretch_features: str = Field(..., description="List of future or stretch features.")


class SwotAnalysis(StrategySection):
    strengths: str = Field(..., description="List of strengths.")
    weaknesses: str = Field(..., description="List of weaknesses.")
    opportunities: str = Field(..., description="List of opportunities.")
    threats: str = Field(..., description="List of threats.")


class StrategyResult(CamelModel):
    gtm_strategy: GTMStrategy = Field(..., description="Go-to-market strategy.")
    feature_roadmap: FeatureRoadmap = Field(..., description="Feature roadmap.")
    swot_analysis: SwotAnalysis = Field(..., description="SWOT analysis.")


class ActionEnvelope(CamelModel):
    data: Optional[StrategyResult] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def exactly_one(self):
        if (self.data is None) == (self.error is None):
            raise ValueError("Envelope must carry exactly one of data or error")
        return self

    @classmethod
    def success(cls, result: StrategyResult) -> "ActionEnvelope":
        return cls(data=result, error=None)

    @classmethod
    def failure(cls, message: str) -> "ActionEnvelope":
        return cls(data=None, error=message)


class ExportRequest(CamelModel):
    startup_idea: str
    market: Optional[str] = None
    result: StrategyResult
