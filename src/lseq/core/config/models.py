"""
Configuration data models for lseq.

These models define the structure of .lseq.json and
~/.config/lseq/config.json files, with validation and type safety via
Pydantic.
"""

from pydantic import BaseModel, ConfigDict, Field


class GeneratorConfig(BaseModel):
    """
    Identifier generator settings.

    Both values shape identifier growth: a wider initial field gives more
    room at the root, a larger boundary spreads concurrent insertions
    further apart at the cost of using up a depth sooner.
    """
    initial_width: int = Field(
        default=5,
        ge=1,
        description="Bits allocated to depth 0; each deeper level gets one more"
    )
    boundary: int = Field(
        default=10,
        ge=1,
        description="Maximum random step when allocating a new identifier"
    )


class LSEQConfig(BaseModel):
    """
    Root configuration model.

    Example .lseq.json:
        {"generator": {"initial_width": 6, "boundary": 20}}
    """
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)

    model_config = ConfigDict(extra="ignore")
