"""Before-persist hook dispatch.

Hooks are registered explicitly per model class and run, in registration
order, exactly once for every new instance about to be inserted. The
registry plugs into SQLAlchemy's ``before_flush`` session event, so hooks
fire for anything added to a session regardless of which code path
added it.
"""

from __future__ import annotations

from typing import Any, Callable

from sqlalchemy import event, inspect
from sqlalchemy.orm import Session, sessionmaker

from infrastructure.observability import DefaultPersistenceProbe, PersistenceProbe

PersistHook = Callable[[Any], None]

_DISPATCHED_KEY = "persist_hooks_dispatched"


class PersistHookRegistry:
    """Ordered before-persist callbacks keyed by model class.

    A hook registered for a class also applies to its mapped subclasses.
    Hooks registered on a base class run before those on the subclass.
    """

    def __init__(self, probe: PersistenceProbe | None = None) -> None:
        self._hooks: dict[type, list[PersistHook]] = {}
        self._probe = probe or DefaultPersistenceProbe()

    def register(self, model: type, hook: PersistHook) -> None:
        """Append ``hook`` to the callbacks for ``model``."""
        self._hooks.setdefault(model, []).append(hook)

    def hooks_for(self, model: type) -> list[PersistHook]:
        """Return every hook applying to ``model``, base classes first."""
        hooks: list[PersistHook] = []
        for klass in reversed(model.__mro__):
            hooks.extend(self._hooks.get(klass, ()))
        return hooks

    def run_before_persist(self, entity: Any) -> None:
        """Run the hooks for ``entity`` unless they already ran.

        Raises:
            Exception: Whatever a hook raises; the flush is aborted.
        """
        state = inspect(entity)
        if state.info.get(_DISPATCHED_KEY):
            return

        hooks = self.hooks_for(type(entity))
        for hook in hooks:
            try:
                hook(entity)
            except Exception as e:
                self._probe.persist_hook_failed(type(entity).__name__, e)
                raise

        state.info[_DISPATCHED_KEY] = True
        if hooks:
            self._probe.persist_hooks_ran(type(entity).__name__, len(hooks))

    def attach(self, target: sessionmaker | type[Session] | Session) -> None:
        """Listen for flushes on a sessionmaker, Session class or session."""
        event.listen(target, "before_flush", self._before_flush)

    def _before_flush(self, session: Session, flush_context: Any, instances: Any) -> None:
        for entity in list(session.new):
            self.run_before_persist(entity)
