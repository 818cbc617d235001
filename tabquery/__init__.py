# Tabquery Package
"""
Terse query language over live browser tabs.

Layers:
  - search: tokenizer, parser, bang/command registry, filters, engine
  - services: browser and vault adapters the engine talks to
  - utils: URL helpers and settings loading
"""

__version__ = "0.1.0-dev"
