"""
Tests for request parameter parsing and binding.
"""
from utils.request import RequestData, bind_request, current_request, parse_bracketed


def test_parse_bracketed_nests_form_names():
     parsed = parse_bracketed([
          ("User[email]", "ana@example.com"),
          ("User[first_name]", "Ana"),
          ("Tenant[contact_number]", "0917"),
          ("page", "2"),
     ])
     assert parsed == {
          "User": {"email": "ana@example.com", "first_name": "Ana"},
          "Tenant": {"contact_number": "0917"},
          "page": "2",
     }


def test_parse_bracketed_deep_keys_and_lists():
     parsed = parse_bracketed([
          ("Tenant[user][email]", "a@b.co"),
          ("tags[]", "pool"),
          ("tags[]", "gym"),
          ("page", "1"),
          ("page", "3"),
     ])
     assert parsed == {
          "Tenant": {"user": {"email": "a@b.co"}},
          "tags": ["pool", "gym"],
          "page": "3",
     }


def test_request_data_accessors():
     data = RequestData.from_mapping(
          post={"User[email]": "ana@example.com"},
          query={"sort": "name"},
     )
     assert data.post() == {"User": {"email": "ana@example.com"}}
     assert data.post("User") == {"email": "ana@example.com"}
     assert data.post("Tenant") is None
     assert data.post("Tenant", {}) == {}
     assert data.get("sort") == "name"
     assert data.get() == {"sort": "name"}


def test_bind_request_is_scoped():
     assert current_request() is None
     outer = RequestData.from_mapping({"a": "1"})
     inner = RequestData.from_mapping({"b": "2"})
     with bind_request(outer):
          assert current_request() is outer
          with bind_request(inner):
               assert current_request() is inner
          assert current_request() is outer
     assert current_request() is None
