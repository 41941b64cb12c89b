"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

OutputFormat = Literal["terminal", "json"]
OUTPUT_FORMATS = ("terminal", "json")


@dataclass
class FormatConfig:
    formatter: str = ""  # shell command, "{}" is replaced by the file path
    patterns: List[str] = field(default_factory=list)  # "!" prefix excludes
    update_working_tree: bool = True
    write: bool = True  # False = check only, nothing is written
    jobs: int = 1  # 0 = one worker per CPU
    timeout: Optional[float] = None  # seconds per formatter call, 0/None = no limit


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True


@dataclass
class StagefmtConfig:
    version: str = "1.0"
    format: FormatConfig = field(default_factory=FormatConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
