"""
Tests for the active-record layer: request loading, rule validation,
errors, lifecycle dispatch and persistence.
"""
import pytest
from sqlalchemy.exc import IntegrityError

from models import ActiveRecord, Address, LifecyclePhase, User


class Sample(ActiveRecord):
     """Unmapped record for lifecycle dispatch tests."""


class VetoingSample(Sample):
     pass


VetoingSample.on(LifecyclePhase.LOAD, lambda event: False, name="refuse")


def test_load_uses_form_name_scope():
     user = User()
     assert user.load({"User": {"email": "ana@example.com", "first_name": "Ana"}}) is True
     assert user.email == "ana@example.com"
     assert user.first_name == "Ana"


def test_load_with_empty_form_name_uses_data_as_is():
     address = Address()
     assert address.load({"city": "Makati", "unknown": "x"}, "") is True
     assert address.city == "Makati"
     assert not hasattr(address, "unknown")


def test_load_reports_missing_data():
     user = User()
     assert user.load({"Tenant": {"contact_number": "0917"}}) is False
     assert user.load({}) is False
     assert user.load(None) is False


def test_form_name_can_be_declared():
     class Account(Sample):
          __form_name__ = "acct"

     assert Account.form_name() == "acct"
     assert User.form_name() == "User"


def test_safe_attributes_follow_rules():
     assert set(User.safe_attributes()) == {"email", "first_name", "last_name", "role"}


def test_validate_reports_field_errors():
     user = User(email="nope")
     assert user.validate() is False
     assert set(user.errors) == {"email", "first_name", "last_name"}
     assert user.first_errors()["first_name"] == "Field required"


def test_validate_writes_back_rule_defaults():
     user = User(email="ana@example.com", first_name="Ana", last_name="Reyes")
     assert user.validate() is True
     assert user.role == "tenant"
     assert user.errors == {}


def test_validate_clears_previous_errors():
     user = User(email="ana@example.com", first_name="Ana")
     assert user.validate() is False
     user.last_name = "Reyes"
     assert user.validate() is True
     assert not user.has_errors()


def test_error_helpers():
     address = Address()
     address.add_error("city", "City is required.")
     address.add_errors({"city": ["Too short."], "street": ["Unknown street."]})
     assert address.has_errors()
     assert address.has_errors("street")
     assert not address.has_errors("province")
     assert address.errors["city"] == ["City is required.", "Too short."]
     assert address.first_errors() == {"city": "City is required.", "street": "Unknown street."}
     address.clear_errors()
     assert address.errors == {}


def test_handlers_run_in_registration_order():
     class Recorder(Sample):
          pass

     calls = []
     Recorder.on(LifecyclePhase.VALIDATE, lambda event: calls.append(("first", event.phase)), name="first")
     Recorder.on(LifecyclePhase.VALIDATE, lambda event: calls.append(("second", event.phase)), name="second")

     assert Recorder().validate() is True
     assert calls == [("first", LifecyclePhase.VALIDATE), ("second", LifecyclePhase.VALIDATE)]
     assert Recorder.handlers(LifecyclePhase.VALIDATE) == ["first", "second"]


def test_handler_veto_stops_dispatch():
     calls = []

     class Guarded(Sample):
          pass

     Guarded.on(LifecyclePhase.SAVE, lambda event: False, name="deny")
     Guarded.on(LifecyclePhase.SAVE, lambda event: calls.append("after"), name="after")

     event = Guarded().trigger(LifecyclePhase.SAVE)
     assert event.is_valid is False
     assert calls == []


def test_load_phase_veto_fails_validation():
     assert VetoingSample().validate() is False


def test_handlers_are_inherited_but_not_shared_upwards():
     class Child(VetoingSample):
          pass

     Child.on(LifecyclePhase.DELETE, lambda event: None, name="child-only")
     assert Child.handlers(LifecyclePhase.LOAD) == ["refuse"]
     assert Child.handlers(LifecyclePhase.DELETE) == ["child-only"]
     assert VetoingSample.handlers(LifecyclePhase.DELETE) == []
     assert Sample.handlers(LifecyclePhase.LOAD) == []


def test_handlers_added_to_base_later_reach_subclasses():
     class Parent(Sample):
          pass

     class Child(Parent):
          pass

     calls = []
     Child.on(LifecyclePhase.SAVE, lambda event: calls.append("child"), name="child")
     Parent.on(LifecyclePhase.SAVE, lambda event: calls.append("parent"), name="parent")

     assert Child.handlers(LifecyclePhase.SAVE) == ["parent", "child"]
     assert Parent.handlers(LifecyclePhase.SAVE) == ["parent"]
     Child().trigger(LifecyclePhase.SAVE)
     assert calls == ["parent", "child"]


def test_save_and_delete(db):
     address = Address(city="Pasig")
     assert address.is_new
     assert address.save(db) is True
     assert not address.is_new
     db.commit()

     assert address.delete(db) is True
     db.commit()
     assert db.query(Address).count() == 0


def test_save_refuses_invalid_record(db):
     address = Address()
     assert address.save(db) is False
     assert "city" in address.errors
     assert db.query(Address).count() == 0


def test_save_without_validation_propagates_database_errors(db):
     with pytest.raises(IntegrityError):
          Address().save(db, run_validation=False)


def test_delete_of_new_record_is_refused(db):
     assert Address(city="Pasig").delete(db) is False


def test_populate_relation_only_for_relationships():
     address = Address()
     assert address.populate_relation("city", "Makati") is False
     assert address.city is None
