import pytest
from pydantic import ValidationError

from api_reference.catalog.base import ApiCategory, ApiEndpoint, CatalogInfo


def _make_endpoint(**overrides) -> ApiEndpoint:
    defaults = dict(
        id="get-patient",
        title="Get Patient",
        method="GET",
        endpoint="/v2/org/{OrgId}/Patient/{PatientID}",
        category="Patient Management",
        description="Retrieve patient record",
        request="GET /v2/org/1/Patient/10000 HTTP/1.1",
        response="HTTP/1.1 200 OK",
    )
    defaults.update(overrides)
    return ApiEndpoint(**defaults)


class TestApiEndpoint:
    def test_create_minimal_endpoint(self):
        ep = _make_endpoint()
        assert ep.method == "GET"
        assert ep.search_params is None

    def test_method_is_free_text(self):
        ep = _make_endpoint(method="HL7 v2.x", endpoint="MLLP-based PIX service")
        assert ep.method == "HL7 v2.x"

    def test_search_params_accepts_wire_name(self):
        ep = ApiEndpoint.model_validate({
            **_make_endpoint().model_dump(exclude={"search_params"}),
            "searchParams": ["fname (required): First name"],
        })
        assert ep.search_params == ["fname (required): First name"]

    def test_dump_uses_wire_name(self):
        ep = _make_endpoint(search_params=["gender: M/F/U/O"])
        data = ep.model_dump(by_alias=True)
        assert data["searchParams"] == ["gender: M/F/U/O"]
        assert "search_params" not in data

    def test_dump_omits_missing_search_params(self):
        data = _make_endpoint().model_dump(by_alias=True, exclude_none=True)
        assert "searchParams" not in data

    def test_missing_field_rejected(self):
        with pytest.raises(ValidationError):
            ApiEndpoint(id="x", title="X", method="GET")

    def test_endpoint_is_immutable(self):
        ep = _make_endpoint()
        with pytest.raises(ValidationError):
            ep.title = "Changed"


class TestApiCategory:
    def test_create_category(self):
        cat = ApiCategory(
            id="patient-management",
            name="Patient Management",
            description="MPI records",
            color="#3b82f6",
            endpoints=[_make_endpoint()],
        )
        assert cat.endpoints[0].id == "get-patient"

    def test_category_is_immutable(self):
        cat = ApiCategory(id="a", name="A", description="", color="#000", endpoints=[])
        with pytest.raises(ValidationError):
            cat.name = "B"


class TestCatalogInfo:
    def test_defaults(self):
        info = CatalogInfo(title="Reference")
        assert info.service_roots == []
        assert info.security == []
        assert info.version == ""
