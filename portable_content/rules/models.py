from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _StrictModel(BaseModel):
    # Misspelled keys in rules.yaml fail loading instead of being ignored
    model_config = ConfigDict(extra="forbid")

class LengthRule(_StrictModel):
    max: int = Field(gt=0)

class RangeRule(_StrictModel):
    min: int = Field(ge=0)
    max: int = Field(gt=0)

    @model_validator(mode="after")
    def check_bounds(self) -> Self:
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self

class ContentRules(_StrictModel):
    allowed_fields: list[str] = Field(
        default_factory=lambda: ["type", "title", "summary", "blocks"]
    )
    type: LengthRule = Field(default_factory=lambda: LengthRule(max=50))
    title: LengthRule = Field(default_factory=lambda: LengthRule(max=255))
    summary: LengthRule = Field(default_factory=lambda: LengthRule(max=1000))
    blocks: RangeRule = Field(default_factory=lambda: RangeRule(min=1, max=10))

class MarkdownBlockRules(_StrictModel):
    max_source_length: int = Field(default=100_000, gt=0)
    check_code_fences: bool = True
    check_link_targets: bool = True

class BlockKindsRules(_StrictModel):
    markdown: MarkdownBlockRules = Field(default_factory=MarkdownBlockRules)

class Rules(_StrictModel):
    rules_version: str = "1"
    content: ContentRules = Field(default_factory=ContentRules)
    block_kinds: BlockKindsRules = Field(default_factory=BlockKindsRules)
