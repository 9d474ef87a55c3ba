import time

import httpx
import pytest
from jose import jwt

from backoffice.auth import AuthSession, SignInError, is_expired, read_claims
from backoffice.client import api_client
from backoffice.contracts.orders import batch_order_contract
from backoffice.contracts.tag import tag_contract
from backoffice.errors import BackofficeError, ContractValidationError, UnknownEndpoint
from tests.conftest import BASE_URL, json_body


def test_call_sends_validated_query_and_token(api, http):
    api.on("GET", "/admin/tag", body={"code": 0, "data": [], "total": 0})
    client = api_client(tag_contract, token="abc", http=http, base_url=BASE_URL)

    response = client.get_tags(query={"page": 2, "limit": 10, "sort_by": "tag_name", "order": "DESC"})

    assert response.ok
    sent = api.requests[0]
    assert sent.headers["Authorization"] == "Bearer abc"
    assert dict(sent.url.params) == {"page": "2", "limit": "10", "sort_by": "tag_name", "order": "DESC"}


def test_body_is_serialized_as_json(api, http):
    api.on("POST", "/admin/tag", body={"message": "ok"})
    client = api_client(tag_contract, http=http, base_url=BASE_URL)
    client.create_tag(body={"tag_name": "Green"})
    assert json_body(api.requests[0]) == {"tag_name": "Green"}
    assert "Authorization" not in api.requests[0].headers


def test_invalid_body_never_reaches_the_network(api, http):
    client = api_client(tag_contract, http=http, base_url=BASE_URL)
    with pytest.raises(ContractValidationError) as info:
        client.create_tag(body={"tag_name": ""})
    assert "tag_name" in info.value.field_errors
    assert api.requests == []


def test_invalid_sort_column_is_rejected(http):
    client = api_client(tag_contract, http=http, base_url=BASE_URL)
    with pytest.raises(ContractValidationError):
        client.get_tags(query={"sort_by": "created_at"})


def test_error_statuses_come_back_as_responses(api, http):
    api.on("DELETE", "/admin/tag", status=400, body={"error": "in use"})
    client = api_client(tag_contract, http=http, base_url=BASE_URL)
    response = client.delete_tag(body={"tag_id": "t1"})
    assert response.status == 400
    assert not response.ok
    assert response.body == {"error": "in use"}


def test_network_failure_raises_the_transport_error(offline_http):
    client = api_client(tag_contract, http=offline_http, base_url=BASE_URL)
    with pytest.raises(httpx.ConnectError, match="api down"):
        client.get_all_tags()


def test_path_parameters_are_substituted(api, http):
    api.on("PUT", "/orders/batch/ord_7", body={"message": "ok"})
    client = api_client(batch_order_contract, http=http, base_url=BASE_URL)
    assert client.update_batch_order(body={"remark": "rush"}, params={"orderId": "ord_7"}).ok


def test_missing_path_parameter_raises(http):
    client = api_client(batch_order_contract, http=http, base_url=BASE_URL)
    with pytest.raises(BackofficeError):
        client.get_batch_order()


def test_unknown_endpoint():
    client = api_client(tag_contract)
    with pytest.raises(UnknownEndpoint):
        client.call("get_everything")
    with pytest.raises(AttributeError):
        client.get_everything


def _token(**claims):
    return jwt.encode(claims, "secret", algorithm="HS256")


def test_claims_are_read_without_verification():
    assert read_claims(_token(sub="usr_1", role="admin"))["role"] == "admin"
    assert read_claims("opaque-token") == {}


def test_expired_token_is_not_handed_out():
    token = _token(sub="usr_1", exp=int(time.time()) - 10)
    assert is_expired(token)
    assert AuthSession(token=token).get_token() is None
    assert AuthSession(token=_token(sub="usr_1", exp=int(time.time()) + 600)).signed_in


def test_sign_in_stores_the_token(api, http):
    token = _token(sub="usr_1")
    api.on("POST", "/login", body={"access_token": token, "token_type": "bearer"})
    session = AuthSession(auth_url=BASE_URL, http=http)
    assert session.sign_in("a@example.com", "pw") == token
    assert session.get_token() == token
    assert json_body(api.requests[0]) == {"email": "a@example.com", "password": "pw"}

    session.sign_out()
    assert session.get_token() is None


def test_rejected_sign_in_raises(api, http):
    api.on("POST", "/login", status=401, body={"error": "Incorrect email/password"})
    with pytest.raises(SignInError):
        AuthSession(auth_url=BASE_URL, http=http).sign_in("a@example.com", "bad")
