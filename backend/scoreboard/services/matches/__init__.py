"""Match domain services: clock state machine, storage and the tick driver.

This package contains the domain logic imported by HTTP routes, the CLI and
the background ticker, keeping transport concerns separated from the match
clock rules.
"""
