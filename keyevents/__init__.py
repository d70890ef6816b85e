"""Key events timeline: row extraction, date windowing and lane layout for dated milestones."""

__version__ = "0.1.0"
