"""
Shared pytest fixtures for the docmodel test suite.

Usage in tests:
    def test_something(project_factory):
        fn = project_factory.add("clamp", ReflectionKind.FUNCTION)
        ...

    def test_with_data(sample_project):
        factory, nodes = sample_project
        data = factory.serialize()
"""

import pytest

from docmodel.serialization import Serializer, Deserializer
from tests.factories import ProjectFactory, CapturingLogger


@pytest.fixture
def project_factory():
    """Empty project with a capturing logger."""
    return ProjectFactory()


@pytest.fixture
def sample_project():
    """
    Factory pre-populated with the sample library.

    Returns:
        (factory, nodes) where nodes maps short names to reflections
    """
    factory = ProjectFactory()
    nodes = factory.create_sample_project()
    return factory, nodes


@pytest.fixture
def logger():
    return CapturingLogger()


@pytest.fixture
def serializer():
    return Serializer()


@pytest.fixture
def deserializer(logger):
    """A fresh deserialization session bound to the `logger` fixture."""
    return Deserializer(logger)
