import pytest

from garage import Engine, Fuel, Logger, make_v8
from lazywire import (
    Container,
    ContainerConfig,
    DependencyError,
    default_container,
    init_default_container,
    make_container,
    reset_default_container,
)


@pytest.fixture(autouse=True)
def clean_default_container():
    reset_default_container()
    yield
    reset_default_container()


def test_make_container_registers_definitions():
    logger = Logger()
    container = make_container(
        definitions={Engine: make_v8},
        shared={Fuel: Fuel, Logger: logger},
    )

    assert container.get(Engine).cylinders == 8
    assert container.get(Engine) is not container.get(Engine)
    assert container.get(Fuel) is container.get(Fuel)
    assert container.get(Logger) is logger


def test_make_container_uses_config():
    container = make_container(ContainerConfig(auto_wire=False))

    assert container.config.auto_wire is False
    assert Fuel not in container


def test_default_container_requires_initialisation():
    with pytest.raises(DependencyError, match="not initialised"):
        default_container()


def test_default_container_initialised_once():
    container = init_default_container(definitions={Engine: make_v8})

    assert isinstance(container, Container)
    assert default_container() is container
    assert default_container().get(Engine).cylinders == 8
    with pytest.raises(DependencyError, match="already initialised"):
        init_default_container()


def test_unsynchronised_container_still_resolves():
    container = make_container(ContainerConfig(thread_safe=False))

    assert container.get(Engine).cylinders == 4
