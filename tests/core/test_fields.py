import dataclasses

import pytest

from chmeta.core import ColumnDescriptor, FieldType


def test_defaults_mark_length_and_precision_undeclared():
    column = ColumnDescriptor("title", FieldType.STRING)
    assert column.length == -1
    assert column.precision == -1


def test_type_families():
    assert ColumnDescriptor("a", FieldType.BIGNUMBER).is_numeric
    assert ColumnDescriptor("a", FieldType.INTEGER).is_numeric
    assert not ColumnDescriptor("a", FieldType.STRING).is_numeric
    assert ColumnDescriptor("a", FieldType.DATE).is_temporal
    assert ColumnDescriptor("a", FieldType.TIMESTAMP).is_temporal
    assert not ColumnDescriptor("a", FieldType.BOOLEAN).is_temporal


def test_renamed_copies_metadata():
    column = ColumnDescriptor("amount", FieldType.NUMBER, 10, 2)
    copy = column.renamed("amount_KTL")
    assert copy == ColumnDescriptor("amount_KTL", FieldType.NUMBER, 10, 2)
    assert column.name == "amount"


def test_descriptor_is_immutable():
    column = ColumnDescriptor("amount", FieldType.NUMBER)
    with pytest.raises(dataclasses.FrozenInstanceError):
        column.name = "other"
