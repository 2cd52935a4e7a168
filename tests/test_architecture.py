"""Architectural boundary tests using pytest-archon.

These tests verify that the codebase follows clean architecture principles:
- Domain layer has no dependencies on adapters
- Application services don't depend on adapters
- Adapters can depend on domain
"""

from pytest_archon import archrule


def test_domain_models_have_no_dependencies() -> None:
    """Domain models should not import any other project layer."""
    (
        archrule("domain models", comment="Domain models should be independent")
        .match("visit_counter.domain.models*")
        .should_not_import("visit_counter.adapters*")
        .should_not_import("visit_counter.application*")
        .should_not_import("visit_counter.domain.contracts*")
        .should_not_import("visit_counter.domain.ports*")
        .may_import("visit_counter.domain.models*")
        .check("visit_counter")
    )


def test_domain_ports_have_no_dependencies() -> None:
    """Domain ports (interfaces) should not import adapters or application."""
    (
        archrule("domain ports", comment="Domain ports should be independent")
        .match("visit_counter.domain.ports*")
        .should_not_import("visit_counter.adapters*")
        .should_not_import("visit_counter.application*")
        .may_import("visit_counter.domain*")
        .check("visit_counter")
    )


def test_domain_contracts_have_no_dependencies() -> None:
    """Domain contracts (protocols) should not import adapters or application."""
    (
        archrule("domain contracts", comment="Domain contracts should be independent")
        .match("visit_counter.domain.contracts*")
        .should_not_import("visit_counter.adapters*")
        .should_not_import("visit_counter.application*")
        .may_import("visit_counter.domain*")
        .check("visit_counter")
    )


def test_application_services_dont_import_adapters() -> None:
    """Application services should not depend on adapters (infrastructure layer)."""
    (
        archrule(
            "application services", comment="Application services should not depend on adapters"
        )
        .match("visit_counter.application*")
        .should_not_import("visit_counter.adapters*")
        .may_import("visit_counter.domain*")
        .may_import("visit_counter.application*")
        .check("visit_counter")
    )


def test_adapters_dont_import_application() -> None:
    """Adapters should not import application services (to avoid cycles)."""
    (
        archrule(
            "adapters independence", comment="Adapters should not depend on application services"
        )
        .match("visit_counter.adapters*")
        .should_not_import("visit_counter.application*")
        .may_import("visit_counter.domain*")
        .may_import("visit_counter.adapters*")
        .check("visit_counter", only_direct_imports=True)
    )


def test_cli_dont_import_web_adapters() -> None:
    """CLI should not import web adapters to allow running it without the web stack."""
    (
        archrule("CLI independence", comment="CLI should not depend on web adapters")
        .match("visit_counter.cli")
        .should_not_import("visit_counter.adapters.web*")
        .may_import("visit_counter.domain*")
        .may_import("visit_counter.adapters.config*")
        .may_import("visit_counter.adapters.database*")
        .check("visit_counter")
    )
