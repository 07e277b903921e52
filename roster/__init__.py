"""Staff shift rostering: greedy day-by-day assignment with rest and hour rules.

Modules:
- timekeys: day and week keys used to bucket schedule data
- config: load and validate configuration (YAML or JSON)
- engine: constraint state, eligibility filter, shift selector, day filler, generator
- domain: SQLAlchemy models, repositories and session helpers
- services: snapshot loading, generate-and-persist, range deletion
- io: CSV import/export
- validator: post-generation rule checks and summaries
- cli: command-line interface entrypoints
"""

__all__ = [
    "timekeys",
    "config",
    "engine",
    "domain",
    "services",
    "io",
    "validator",
    "cli",
]
