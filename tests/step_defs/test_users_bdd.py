"""
BDD step definitions for the user lifecycle feature (pytest-bdd).
Challenge: Express the create / conflict / soft delete / reactivate flow in Gherkin.
"""

from pytest_bdd import parsers, scenarios, then, when

USERS = "/api/v1/users"

scenarios("../features/users.feature")


@when(parsers.parse('I create a user named "{name}" with email "{email}" and password "{password}"'))
def create_user(api_client, response, name, email, password):
    r = api_client.post(USERS, json={"name": name, "email": email, "password": password})
    response["last"] = r
    if r.status_code == 201:
        response["created"] = r.json()


@when("I fetch the created user")
def fetch_user(api_client, response):
    response["last"] = api_client.get(f"{USERS}/{response['created']['id']}")


@when("I deactivate the created user")
def deactivate_user(api_client, response):
    response["last"] = api_client.delete(f"{USERS}/{response['created']['id']}")


@when("I reactivate the created user")
def reactivate_user(api_client, response):
    response["last"] = api_client.patch(f"{USERS}/{response['created']['id']}/reactivate")


@then("the user is active and has never been updated")
def active_never_updated(response):
    body = response["last"].json()
    assert body["active"] is True
    assert body["updatedAt"] is None


@then("the user is active")
def is_active(response):
    assert response["last"].json()["active"] is True


@then("the body matches the created user")
def matches_created(response):
    assert response["last"].json() == response["created"]
