"""Shared fixtures"""
import pytest

from insight_miner.models import Column, Dataset


@pytest.fixture
def sales_dataset():
    """Small dataset with one numeric and one datetime column"""
    return Dataset(
        id="set-sales",
        name="Sales",
        columns=[
            Column(id="col-revenue", name="Revenue", type="numeric"),
            Column(id="col-order-date", name="Order Date", type="datetime"),
        ]
    )


@pytest.fixture
def orders_dataset():
    """Dataset with a categorical column"""
    return Dataset(
        id="set-orders",
        name="Orders",
        columns=[
            Column(id="col-revenue", name="Revenue", type="numeric"),
            Column(id="col-region", name="Region", type="hierarchy"),
            Column(id="col-order-date", name="Order Date", type="datetime"),
        ]
    )


@pytest.fixture
def empty_dataset():
    return Dataset(id="set-empty", name="Empty", columns=[])
