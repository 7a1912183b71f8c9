# tests/conftest.py
import pytest

from tests.fixtures.entities import Person
from veto import Validator


@pytest.fixture
def person():
    return Person(name="Ada", title="Engineer", age="36")


@pytest.fixture
def blank_person():
    return Person(name="  ", title="", age="abc")


@pytest.fixture
def person_validator():
    """A fresh validator class per test so registrations never leak."""

    class PersonValidator(Validator):
        pass

    PersonValidator.validates("name", presence=True, max_length=10)
    PersonValidator.validates("title", presence=True)
    PersonValidator.validates("age", greater_than_or_equal_to={"with": 18})
    return PersonValidator
