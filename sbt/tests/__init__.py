"""
Pytest suite for the Soul-Bound Token scripts.

Test categories:
- Unit tests: funding guard, retry loop, classification, reports, config
- Service tests: SBT operations against an in-memory fake ledger
- Script tests: exit codes and output with services patched out
"""
