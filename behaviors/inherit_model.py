# behaviors/inherit_model.py
"""
InheritModel - compose an owner record with a dependent record.

The owner "inherits" the fields of a second model it links to through a
foreign-key style attribute. Both records are loaded from the same request,
validated together, saved together and (optionally) deleted together.

Usage:
     class Tenant(ActiveRecord, Base):
          user_id = Column(Integer, ForeignKey("users.id"))
          user_record = relationship("User")

          user = InheritModel(User, relation="user_record")

     tenant = Tenant()
     tenant.user.email = "ana@example.com"   # User built on first access
     tenant.save(db)                        # saves User, then sets tenant.user_id
"""
import logging
import re
from typing import Any, Callable, Mapping, Optional, Type, Union

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Session

from utils.request import RequestData, current_request
from .exceptions import InvalidArgumentError, InvalidConfigError
from .lifecycle import LifecyclePhase, ModelEvent

logger = logging.getLogger(__name__)

InitConfig = Union[Mapping[str, Any], Callable[[Any], None], None]


def _snake_case(name: str) -> str:
     return re.sub(r'(?<!^)(?=[A-Z])', '_', name).lower()


class InheritModel:
     """
     Descriptor exposing a dependent record through a virtual attribute.

     Args:
          dependent_class: model class of the dependent record. When omitted it
               is taken from the owner relationship named by `relation`.
          init: column values for a newly built dependent, or a callable that
               receives the new instance
          virtual_option: name of the proxy attribute (defaults to the name the
               descriptor is assigned to)
          relation: relationship attribute or zero-argument method on the owner
               returning the stored dependent (default: get_<virtual_option>)
          primary_key: primary key attribute of the dependent
          link_attribute: owner attribute receiving the dependent's key
               (default: <virtual_option>_id)
          create_on_empty: build a dependent when the owner has none
          delete_with_owner: delete the dependent when the owner is deleted
          simple_request: read flat request fields ("email") instead of fields
               namespaced by form name ("User[email]")
          form_name: namespace of the dependent's fields in a request
               (default: the dependent's form_name())
     """

     def __init__(
          self,
          dependent_class: Optional[Type[Any]] = None,
          init: InitConfig = None,
          *,
          virtual_option: Optional[str] = None,
          relation: Optional[str] = None,
          primary_key: str = "id",
          link_attribute: Optional[str] = None,
          create_on_empty: bool = True,
          delete_with_owner: bool = True,
          simple_request: bool = False,
          form_name: Optional[str] = None,
     ):
          self.dependent_class = dependent_class
          self.init = {} if init is None else init
          self.virtual_option = virtual_option
          self.relation = relation
          self.primary_key = primary_key
          self.link_attribute = link_attribute
          self.create_on_empty = create_on_empty
          self.delete_with_owner = delete_with_owner
          self.simple_request = simple_request
          self._form_name = form_name
          self.owner_class: Optional[type] = None

     # ------------------------------------------------------------------
     # Attaching
     # ------------------------------------------------------------------

     def __set_name__(self, owner_class: type, name: str) -> None:
          self.attach(owner_class, name)

     def attach(self, owner_class: type, name: Optional[str] = None) -> "InheritModel":
          """
          Validate options, fill defaults and register lifecycle handlers.

          Raises:
               InvalidConfigError: if neither a dependent class nor a virtual
                    option is known, or the relation accessor does not exist
          """
          if name is not None:
               self.virtual_option = name
          if self.dependent_class is None and not self.virtual_option:
               raise InvalidConfigError(
                    f"dependent_class or virtual_option must be set for InheritModel on {owner_class.__name__}"
               )
          if not self.virtual_option:
               self.virtual_option = _snake_case(self.dependent_class.__name__)
          if not self.relation:
               self.relation = f"get_{self.virtual_option}"
          if not self.link_attribute:
               self.link_attribute = f"{self.virtual_option}_id"
          if not hasattr(owner_class, self.relation):
               raise InvalidConfigError(
                    f"{owner_class.__name__} has no relation accessor '{self.relation}' for '{self.virtual_option}'"
               )
          if self.init and not (isinstance(self.init, Mapping) or callable(self.init)):
               raise InvalidConfigError("init must be a mapping or a callable")

          self.owner_class = owner_class
          if name is None:
               setattr(owner_class, self.virtual_option, self)

          prefix = f"{self.virtual_option}."
          owner_class.on(LifecyclePhase.LOAD, self._on_load, name=prefix + "load")
          owner_class.on(LifecyclePhase.VALIDATE, self._on_validate, name=prefix + "validate")
          owner_class.on(LifecyclePhase.SAVE, self._on_save, name=prefix + "save")
          owner_class.on(LifecyclePhase.DELETE, self._on_delete, name=prefix + "delete")
          return self

     def resolve_dependent_class(self) -> type:
          """The dependent model class, looked up from the owner's relationship when not given."""
          if self.dependent_class is None:
               relationships = sa_inspect(self.owner_class).relationships
               if self.relation not in relationships:
                    raise InvalidConfigError(
                         f"Cannot resolve dependent class for '{self.virtual_option}': "
                         f"'{self.relation}' is not a relationship of {self.owner_class.__name__}"
                    )
               self.dependent_class = relationships[self.relation].mapper.class_
          return self.dependent_class

     @property
     def form_name(self) -> str:
          if self._form_name:
               return self._form_name
          dependent_class = self.resolve_dependent_class()
          name_of = getattr(dependent_class, "form_name", None)
          return name_of() if callable(name_of) else dependent_class.__name__

     # ------------------------------------------------------------------
     # Property proxy
     # ------------------------------------------------------------------

     @property
     def _cache_key(self) -> str:
          return f"_{self.virtual_option}_inherited"

     def __get__(self, owner, owner_class=None):
          if owner is None:
               return self
          return self.get(owner)

     def __set__(self, owner, value) -> None:
          self.set(owner, value)

     def get(self, owner) -> Optional[Any]:
          """Dependent record of an owner, resolved on first access."""
          return self.resolve(owner, create=self.create_on_empty)

     def set(self, owner, value) -> None:
          dependent_class = self.resolve_dependent_class()
          if value is not None and not isinstance(value, dependent_class):
               raise InvalidArgumentError(
                    f"{self.virtual_option} should be None or an instance of {dependent_class.__name__}"
               )
          owner.__dict__[self._cache_key] = value

     def resolve(self, owner, create: bool = True) -> Optional[Any]:
          cached = owner.__dict__.get(self._cache_key)
          if cached is not None:
               return cached

          accessor = getattr(owner, self.relation)
          dependent = accessor() if callable(accessor) else accessor
          if dependent is None and create:
               dependent = self.build()
               logger.debug("Built new %s for %r", type(dependent).__name__, owner)
               populate = getattr(owner, "populate_relation", None)
               if callable(populate):
                    populate(self.relation, dependent)

          owner.__dict__[self._cache_key] = dependent
          return dependent

     def build(self) -> Any:
          """New dependent record configured from `init`."""
          dependent_class = self.resolve_dependent_class()
          if isinstance(self.init, Mapping):
               return dependent_class(**self.init)
          dependent = dependent_class()
          if callable(self.init):
               self.init(dependent)
          return dependent

     # ------------------------------------------------------------------
     # Operations
     # ------------------------------------------------------------------

     def request_data(self, request: Optional[RequestData] = None) -> Optional[Mapping[str, Any]]:
          """Fields for the dependent from the bound request (POST first, then GET)."""
          request = request if request is not None else current_request()
          if request is None:
               return None
          if self.simple_request:
               return request.post() or request.get()
          name = self.form_name
          return request.post(name) or request.get(name)

     def load(self, owner, request: Optional[RequestData] = None) -> bool:
          """
          Load request fields into the dependent.

          Returns:
               the dependent's load() result, True when there was nothing to
               load, False (with an owner error) when the fields are not a mapping
          """
          data = self.request_data(request)
          if not data:
               return True
          if not isinstance(data, Mapping):
               owner.add_error(self.virtual_option, f"{self.form_name} must be an object")
               return False
          dependent = self.get(owner)
          if dependent is None:
               return True
          return dependent.load(data, "")

     def validate(self, owner) -> bool:
          """Validate the dependent and copy its errors to the owner."""
          dependent = self.get(owner)
          if dependent is None:
               return True
          if dependent.validate():
               return True
          logger.debug("%s invalid for %r: %s", self.virtual_option, owner, dependent.errors)
          owner.add_errors(dependent.errors)
          return False

     def save(self, owner, session: Session) -> bool:
          """Save the dependent and store its primary key in the owner's link attribute."""
          dependent = self.get(owner)
          if dependent is None:
               return True
          if not dependent.save(session):
               return False
          key = getattr(dependent, self.primary_key)
          setattr(owner, self.link_attribute, key)
          logger.debug("Linked %r.%s = %s", owner, self.link_attribute, key)
          return True

     def delete(self, owner, session: Session) -> Optional[bool]:
          """
          Delete the dependent together with its owner.

          The dependent is scheduled on the owner's session and written by the
          owner's flush, so both deletions share one transaction.

          Returns:
               None when deletion is disabled or there is no stored dependent,
               otherwise the dependent's delete() result
          """
          if not self.delete_with_owner:
               return None
          dependent = self.resolve(owner, create=False)
          if dependent is None or dependent.is_new:
               return None
          logger.info("Deleting %r with owner %r", dependent, owner)
          return dependent.delete(session, flush=False)

     # ------------------------------------------------------------------
     # Lifecycle handlers
     # ------------------------------------------------------------------

     def _on_load(self, event: ModelEvent) -> bool:
          return self.load(event.sender)

     def _on_validate(self, event: ModelEvent) -> bool:
          return self.validate(event.sender)

     def _on_save(self, event: ModelEvent) -> bool:
          return self.save(event.sender, event.session)

     def _on_delete(self, event: ModelEvent) -> Optional[bool]:
          return self.delete(event.sender, event.session)

     def __repr__(self):
          dependent = self.dependent_class.__name__ if self.dependent_class else None
          return f"<InheritModel(virtual_option='{self.virtual_option}', dependent={dependent})>"
