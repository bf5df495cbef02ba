# moviecat/database/core/transaction.py
from typing import Callable, List

from sqlalchemy import event
from sqlalchemy.orm import Session

def after_commit(db: Session, fn: Callable[[], None]) -> None:
    """
    Run `fn` once, after the session's current transaction commits.
    A rollback of that transaction discards it, so a later commit on the
    same session does not fire it either.
    """
    spent: List[bool] = []

    def _fire(_session: Session) -> None:
        if spent:
            return
        spent.append(True)
        fn()

    def _discard(_session: Session) -> None:
        spent.append(True)

    event.listen(db, "after_commit", _fire, once=True)
    event.listen(db, "after_rollback", _discard, once=True)
