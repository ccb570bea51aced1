"""State store: actions, transition function and the store holder."""
from tailorshop.store.actions import Action, parse_action
from tailorshop.store.reducer import transition
from tailorshop.store.store import Store, serialized

__all__ = ['Action', 'parse_action', 'transition', 'Store', 'serialized']
