import pytest

from garage import Engine, Logger, LoggerAware, Mailer, Notifier, path_of
from lazywire import Container, InvalidIdentifierError, NoSuchMethodError, ResolutionFailedError
from lazywire.arguments import ArgumentResolver
from lazywire.identifiers import normalize
from lazywire.inflector import Inflector


@pytest.fixture
def container() -> Container:
    container = Container()
    container.share(Logger, Logger())
    return container


def test_inflection_applies_to_every_implementation(container):
    container.inflect(LoggerAware, "set_logger")
    logger = container.get(Logger)

    notifier = container.get(Notifier)

    assert notifier.logger is logger
    assert notifier.mailer.logger is logger


def test_inflection_applied_once_per_resolution(container):
    container.inflect(LoggerAware, "set_logger")

    assert container.get(Mailer).times_logger_set == 1
    assert container.get(Notifier).times_logger_set == 1


def test_shared_service_inflected_once(container):
    container.share(Mailer, Mailer)
    container.inflect(path_of(LoggerAware), "set_logger")

    container.get(Mailer)

    assert container.get(Mailer).times_logger_set == 1


def test_inflection_skips_unrelated_objects(container):
    container.inflect(LoggerAware, "set_logger")

    assert not hasattr(container.get(Engine), "logger")


def test_inflection_arguments_take_priority(container):
    special = Logger()
    container.inflect(Mailer, "set_logger", {"logger": special})

    assert container.get(Mailer).logger is special


def test_inflection_arguments_resolved_once_per_method():
    container = Container()
    container.set(Logger, Logger)
    container.inflect(LoggerAware, "set_logger")

    assert container.get(Mailer).logger is container.get(Notifier).logger
    assert container.get(Logger) is not container.get(Logger)


def test_replacing_inflection_drops_resolved_arguments(container):
    container.inflect(Mailer, "set_logger")
    container.get(Mailer)
    special = Logger()

    container.inflect(Mailer, "set_logger", {"logger": special})

    assert container.get(Mailer).logger is special


def test_apply_inflections_to_external_object(container):
    container.inflect(LoggerAware, "set_logger")
    mailer = Mailer()

    assert container.apply_inflections(mailer) is mailer
    assert mailer.logger is container.get(Logger)


def test_inflect_requires_existing_method(container):
    with pytest.raises(NoSuchMethodError, match='Method "send_all" not found in "Mailer"'):
        container.inflect(Mailer, "send_all")


def test_inflect_requires_class(container):
    with pytest.raises(InvalidIdentifierError):
        container.inflect("no.such.Type", "set_logger")


def test_inflector_resolves_through_supplied_lookup():
    logger = Logger()
    inflector = Inflector(ArgumentResolver(lambda identifier: logger))
    inflector.add_inflection(LoggerAware, "set_logger")

    assert inflector.apply_inflections(Mailer()).logger is logger


def test_inflector_rejects_non_class():
    inflector = Inflector(ArgumentResolver(lambda identifier: None))

    with pytest.raises(InvalidIdentifierError):
        inflector.add_inflection(Mailer(), "set_logger")


def test_unresolvable_inflection_parameter_wrapped_with_chain(container):
    class Labelled:
        label = None

        def tag(self, label: str):
            self.label = label

    container.inflect(Labelled, "tag")

    with pytest.raises(ResolutionFailedError) as raised:
        container.get(Labelled)

    assert raised.value.cause.parameter == "label"
    assert raised.value.chain == [normalize(Labelled)]

    container.inflect(Labelled, "tag", {"label": "fragile"})
    assert container.get(Labelled).label == "fragile"
