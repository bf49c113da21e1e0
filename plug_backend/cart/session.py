# cart/session.py

"""
SESSION CART

Purpose:
- Bind one CartStore to one Django session (each browser/cashier session owns
  exactly one cart).
- Persist after every mutation via a store subscriber, so callers never save
  by hand.
"""

from __future__ import annotations

from cart.store import CartStore

SESSION_KEY = "cart"


class SessionCart:
    def __init__(self, session, key: str = SESSION_KEY):
        self.session = session
        self.key = key
        self.store = CartStore.from_session(session.get(key))
        self._unsubscribe = self.store.subscribe(self._save)

    def _save(self, store: CartStore) -> None:
        self.session[self.key] = store.to_session()
        self.session.modified = True

    def close(self) -> None:
        self._unsubscribe()

    @classmethod
    def for_request(cls, request) -> "SessionCart":
        return cls(request.session)
