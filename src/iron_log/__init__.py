"""iron-log: a wave-periodized strength-training planner."""

__version__ = "0.1.0"
