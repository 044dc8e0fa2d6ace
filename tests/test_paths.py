from orchestrator_client.models import CandidatePromotionRule, InstanceKey
from orchestrator_client.operations._paths import (
    build_path,
    duration_segment,
    parse_instance_keys,
)


def test_build_path_expands_keys_and_skips_none():
    key = InstanceKey(hostname="db1.example.com", port=3306)
    assert build_path("recover", key, None) == "/recover/db1.example.com/3306"


def test_build_path_percent_encodes_every_segment():
    assert build_path("begin-downtime", "ops team", "a/b?c") == (
        "/begin-downtime/ops%20team/a%2Fb%3Fc"
    )


def test_build_path_renders_enums_and_numbers():
    assert build_path("x", CandidatePromotionRule.PREFER_NOT, 7) == "/x/prefer_not/7"


def test_duration_segment():
    assert duration_segment(None) is None
    assert duration_segment("2m") == "120s"


def test_parse_instance_keys_skips_garbage():
    assert parse_instance_keys(["a:1", "b", "c:2:3", "d:4"]) == [
        InstanceKey(hostname="a", port=1),
        InstanceKey(hostname="d", port=4),
    ]
