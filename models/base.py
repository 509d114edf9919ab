# models/base.py
"""
Declarative base and the active-record layer shared by all models.

Every model gets:
- an automatic table name (PropertyUnit -> property_units)
- request loading into its safe attributes
- rule validation through a pydantic schema with field-level errors
- a lifecycle (LOAD, VALIDATE, SAVE, DELETE) that behaviors hook into
"""
import logging
import re
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Optional, Type

from pydantic import BaseModel, ValidationError
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import DeclarativeBase, Session, declared_attr
from sqlalchemy.orm.attributes import set_committed_value

from behaviors.lifecycle import Handler, LifecyclePhase, ModelEvent

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.
     Provides common configuration and mixins.
     """

     @declared_attr.directive
     def __tablename__(cls) -> str:
          """
          Automatically generate table name from class name.
          Example: PropertyUnit -> property_units
          """
          name = re.sub(r'(?<!^)(?=[A-Z])', '_', cls.__name__).lower()
          # Pluralize (simple version)
          if name.endswith('y'):
               return name[:-1] + 'ies'
          elif name.endswith('s'):
               return name + 'es'
          return name + 's'


class ActiveRecord:
     """
     Active-record mixin for declarative models.

     Subclasses may declare:
          __rules__: pydantic model validating the record's attributes
          __safe_attributes__: attribute names accepted by load()
          __form_name__: namespace of the record's fields in a request
     """

     __rules__: ClassVar[Optional[Type[BaseModel]]] = None
     __safe_attributes__: ClassVar[Optional[tuple]] = None
     __form_name__: ClassVar[Optional[str]] = None

     # ------------------------------------------------------------------
     # Lifecycle handlers
     # ------------------------------------------------------------------

     @classmethod
     def on(
          cls,
          phase: LifecyclePhase,
          callback: Callable[[ModelEvent], Any],
          name: Optional[str] = None,
     ) -> None:
          """
          Register a named handler for a phase on this class and its subclasses.

          Handlers live on the class that registered them, so a base class
          handler added later still reaches existing subclasses.
          """
          registry = cls.__dict__.get("_lifecycle_handlers")
          if registry is None:
               registry = {}
               cls._lifecycle_handlers = registry
          handler_name = name or getattr(callback, "__name__", repr(callback))
          registry.setdefault(LifecyclePhase(phase), []).append(Handler(handler_name, callback))

     @classmethod
     def _handlers_for(cls, phase: LifecyclePhase) -> List[Handler]:
          # Base classes first, then subclasses, each in registration order
          phase = LifecyclePhase(phase)
          merged: List[Handler] = []
          for klass in reversed(cls.__mro__):
               registry = klass.__dict__.get("_lifecycle_handlers")
               if registry:
                    merged.extend(registry.get(phase, []))
          return merged

     @classmethod
     def handlers(cls, phase: LifecyclePhase) -> List[str]:
          """Names of the handlers registered for a phase, in dispatch order."""
          return [h.name for h in cls._handlers_for(phase)]

     def trigger(self, phase: LifecyclePhase, session: Optional[Session] = None) -> ModelEvent:
          """Dispatch a phase to its handlers; stops at the first veto."""
          event = ModelEvent(sender=self, phase=LifecyclePhase(phase), session=session)
          for handler in type(self)._handlers_for(event.phase):
               if handler.callback(event) is False:
                    logger.debug("%s vetoed %s on %r", handler.name, event.phase.value, self)
                    event.is_valid = False
               if not event.is_valid:
                    break
          return event

     # ------------------------------------------------------------------
     # Attributes and request loading
     # ------------------------------------------------------------------

     @classmethod
     def form_name(cls) -> str:
          return cls.__form_name__ or cls.__name__

     @classmethod
     def safe_attributes(cls) -> List[str]:
          """Attributes that load() is allowed to assign."""
          if cls.__safe_attributes__ is not None:
               return list(cls.__safe_attributes__)
          if cls.__rules__ is not None:
               return list(cls.__rules__.model_fields)
          mapper = sa_inspect(cls)
          return [
               column.key
               for column in mapper.column_attrs
               if not any(c.primary_key for c in column.columns)
          ]

     def set_attributes(self, values: Mapping[str, Any], safe_only: bool = True) -> None:
          allowed = set(self.safe_attributes()) if safe_only else None
          for name, value in values.items():
               if allowed is not None and name not in allowed:
                    continue
               setattr(self, name, value)

     def load(self, data: Optional[Mapping[str, Any]], form_name: Optional[str] = None) -> bool:
          """
          Populate safe attributes from request data.

          Args:
               data: request fields, usually namespaced by form name
               form_name: namespace key; None uses form_name(), "" uses data as-is

          Returns:
               True if any data was found for this record
          """
          scope = self.form_name() if form_name is None else form_name
          if data and scope:
               data = data.get(scope)
          if not data or not isinstance(data, Mapping):
               return False
          self.set_attributes(data)
          return True

     # ------------------------------------------------------------------
     # Errors
     # ------------------------------------------------------------------

     @property
     def errors(self) -> Dict[str, List[str]]:
          errors = self.__dict__.get("_errors")
          if errors is None:
               errors = self.__dict__["_errors"] = {}
          return errors

     def add_error(self, attribute: str, message: str) -> None:
          self.errors.setdefault(attribute, []).append(message)

     def add_errors(self, items: Mapping[str, List[str]]) -> None:
          for attribute, messages in items.items():
               for message in messages:
                    self.add_error(attribute, message)

     def has_errors(self, attribute: Optional[str] = None) -> bool:
          if attribute is None:
               return bool(self.errors)
          return bool(self.errors.get(attribute))

     def first_errors(self) -> Dict[str, str]:
          return {attribute: messages[0] for attribute, messages in self.errors.items() if messages}

     def clear_errors(self) -> None:
          self.errors.clear()

     # ------------------------------------------------------------------
     # Validation and persistence
     # ------------------------------------------------------------------

     def validate(self) -> bool:
          """
          Validate the record against its rules.

          LOAD handlers run before the rules, VALIDATE handlers after them.
          Failures are reported through errors, never raised.
          """
          self.clear_errors()
          if not self.trigger(LifecyclePhase.LOAD).is_valid:
               return False
          self._check_rules()
          event = self.trigger(LifecyclePhase.VALIDATE)
          return event.is_valid and not self.has_errors()

     def _check_rules(self) -> None:
          rules = self.__rules__
          if rules is None:
               return
          # Unset attributes are left out so rule defaults apply
          values = {}
          for name in rules.model_fields:
               value = getattr(self, name, None)
               if value is not None:
                    values[name] = value
          try:
               checked = rules.model_validate(values)
          except ValidationError as exc:
               for error in exc.errors():
                    attribute = str(error["loc"][0]) if error["loc"] else ""
                    self.add_error(attribute, error["msg"])
               return
          # Write back coerced values (form input arrives as strings)
          for name, value in checked.model_dump().items():
               if getattr(self, name, None) != value:
                    setattr(self, name, value)

     def save(self, session: Session, run_validation: bool = True) -> bool:
          """
          Insert or update the record.

          Returns:
               False if validation failed or a SAVE handler vetoed
          """
          if run_validation and not self.validate():
               logger.info("%r not saved: %s", self, self.first_errors())
               return False
          if not self.trigger(LifecyclePhase.SAVE, session=session).is_valid:
               return False
          session.add(self)
          session.flush()
          return True

     def delete(self, session: Session, flush: bool = True) -> bool:
          """
          Delete a persisted record.

          With flush=False the deletion is only scheduled, so it is written
          together with whatever the session flushes next.
          """
          if self.is_new:
               return False
          if not self.trigger(LifecyclePhase.DELETE, session=session).is_valid:
               return False
          session.delete(self)
          if flush:
               session.flush()
          return True

     @property
     def is_new(self) -> bool:
          return not sa_inspect(self).has_identity

     def populate_relation(self, name: str, value: Any) -> bool:
          """Put a record into a relationship without marking it as changed."""
          mapper = sa_inspect(type(self), raiseerr=False)
          if mapper is None or name not in mapper.relationships:
               return False
          set_committed_value(self, name, value)
          return True
