# tests/test_base.py
import pytest

from densesparse import denselist, sparselist
from densesparse._base import _OrderedBase


def test_base_cannot_be_instantiated():
    """Test the shared base is abstract."""
    with pytest.raises(TypeError):
        _OrderedBase()


def test_subclass_must_provide_contract():
    """Test a subclass missing index_of cannot be instantiated."""

    class partial(_OrderedBase):  # noqa: N801
        def __len__(self):
            return 0

        def __iter__(self):
            return iter(())

    with pytest.raises(TypeError):
        partial()


@pytest.mark.parametrize("container", [denselist(), sparselist()], ids=["denselist", "sparselist"])
def test_containers_implement_contract(container):
    """Test both containers are concrete subclasses of the shared base."""
    assert isinstance(container, _OrderedBase)
    assert container.length == 0
    assert container.includes(1) is False
