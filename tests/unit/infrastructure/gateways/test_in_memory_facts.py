"""Unit tests for InMemoryClassFactsSource."""

from webtest_conventions.domain.facts import ClassFacts
from webtest_conventions.domain.names import DOT
from webtest_conventions.infrastructure.gateways.in_memory_facts import InMemoryClassFactsSource

CRUD_BASE = "EasyCorp\\Bundle\\EasyAdminBundle\\Controller\\AbstractCrudController"
ABSTRACT_CONTROLLER = "Symfony\\Bundle\\FrameworkBundle\\Controller\\AbstractController"
CONTROLLER_TRAIT = "Symfony\\Bundle\\FrameworkBundle\\Controller\\ControllerTrait"


class TestInMemoryClassFactsSource:
    def test_ancestors_are_closed_transitively(self) -> None:
        source = InMemoryClassFactsSource(
            [
                ClassFacts(name="App\\Admin\\UserCrudController", parent="App\\Admin\\BaseCrud"),
                ClassFacts(name="App\\Admin\\BaseCrud", parent=CRUD_BASE, is_abstract=True),
                ClassFacts(
                    name=CRUD_BASE,
                    parent=ABSTRACT_CONTROLLER,
                    ancestors=frozenset({"EasyCorp\\Contracts\\CrudControllerInterface"}),
                ),
            ]
        )
        facts = source.load("App\\Admin\\UserCrudController")
        assert facts.ancestors == frozenset(
            {
                "App\\Admin\\BaseCrud",
                CRUD_BASE,
                ABSTRACT_CONTROLLER,
                "EasyCorp\\Contracts\\CrudControllerInterface",
            }
        )
        assert not facts.is_abstract

    def test_traits_are_inherited_from_known_ancestors(self) -> None:
        source = InMemoryClassFactsSource(
            [
                ClassFacts(name="App\\Controller\\Home", parent="App\\Controller\\Base"),
                ClassFacts(name="App\\Controller\\Base", traits=frozenset({"\\" + CONTROLLER_TRAIT})),
            ]
        )
        assert source.load("App\\Controller\\Home").traits == frozenset({CONTROLLER_TRAIT})

    def test_leading_separator_is_ignored(self) -> None:
        source = InMemoryClassFactsSource([ClassFacts(name="\\App\\Foo")])
        assert "App\\Foo" in source
        assert source.load("\\App\\Foo").exists
        assert source.names() == ["App\\Foo"]

    def test_unknown_class(self) -> None:
        facts = InMemoryClassFactsSource().load("App\\Nope")
        assert not facts.exists
        assert facts.name == "App\\Nope"

    def test_cycles_terminate(self) -> None:
        source = InMemoryClassFactsSource(
            [ClassFacts(name="A", parent="B"), ClassFacts(name="B", parent="A")]
        )
        assert source.load("A").ancestors == frozenset({"B"})

    def test_mapping_input_and_dotted_names(self) -> None:
        source = InMemoryClassFactsSource(
            {
                "app.views.UserView": ClassFacts(name="app.views.UserView", parent="app.base.View"),
                "app.base.View": ClassFacts(name="app.base.View", parent="django.views.View"),
            },
            separator=DOT,
        )
        facts = source.load(".app.views.UserView")
        assert facts.ancestors == frozenset({"app.base.View", "django.views.View"})
