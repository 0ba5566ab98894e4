from .debouncer import DEFAULT_DEBOUNCE_SECONDS, DebounceState, SearchDebouncer
from .scheduler import AsyncioScheduler, Scheduler

__all__ = ["AsyncioScheduler", "DEFAULT_DEBOUNCE_SECONDS", "DebounceState", "Scheduler", "SearchDebouncer"]
