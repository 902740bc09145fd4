import pytest
from tablecensus.census.blacklist import is_excluded
from tablecensus.census.classifier import classify
from tablecensus.domain.models import PathClass

@pytest.mark.parametrize("location", [
    "hdfs://cluster/a/b",
    "hdfs://ns1/warehouse/ods.db/orders",
    "viewfs-wrapped:hdfs://ns1/a",
])
def test_hdfs_locations_are_measurable(location):
    assert classify(location) is PathClass.MEASURABLE

@pytest.mark.parametrize("location", [
    "/local/a/b",
    "s3a://bucket/warehouse/t",
    "file:///tmp/t",
    "",
])
def test_other_locations_are_unmeasurable(location):
    assert classify(location) is PathClass.UNMEASURABLE

def test_blacklist_membership():
    blacklist = frozenset({"stg_stream", "tmp"})
    assert is_excluded("stg_stream", blacklist)
    assert not is_excluded("ods", blacklist)
    assert not is_excluded("ods", frozenset())
