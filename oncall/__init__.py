"""On-call duty scheduler: fair assignment of primary and secondary night duty.

Modules:
- config: load and validate configuration (YAML or JSON)
- domain: models, error types and the in-memory roster
- services: date utilities, slot generation, targets, scoring, fairness report
- engine: greedy assignment, swap optimizer, balancer and the OnCallScheduler surface
- io: CSV import/export and calendar projections
- validator: post-generation validations and summaries
- cli: command-line interface entrypoints
"""

__all__ = [
    "config",
    "domain",
    "services",
    "engine",
    "io",
    "validator",
    "cli",
]
