"""BDD tests for order checkout."""

from pytest_bdd import scenarios

scenarios("features/checkout.feature")
