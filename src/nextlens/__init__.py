"""nextlens - static architecture analysis for React / Next.js projects."""

__version__ = "0.1.0"
