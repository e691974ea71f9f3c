import json

import pytest

from staycalc.domain.models import MilestoneTrigger, VoucherReward
from staycalc.repository import state_store
from staycalc.repository.migrations import migrate_state, normalize_point_value
from staycalc.repository.state_store import StateLoadError, StateStore

LEGACY_STATE = {
    "version": 1,
    "global_settings": {"preferred_currency": "USD", "nights": 3},
    "programs": [
        {
            "id": "hyatt",
            "name": "World of Hyatt",
            "brand_tiers": [{"id": "5x", "label": "5x", "rate_per_usd": 5}],
            "elite_tiers": [{"id": "member", "label": "Member", "bonus_rate": 0}],
            "sub_brands": [{"id": "studios", "name": "Hyatt Studios", "tier_id": "removed"}],
            "settings": {
                "elite_tier_id": "member",
                "point_value": 0.015,
                "fn_voucher_enabled": True,
                "fn_value_mode": "CASH",
                "fn_value": 300,
                "rules": [
                    {"id": "r1", "name": "", "enabled": True, "trigger": {"type": "per_stay"}, "reward": {"type": "fn", "count": 1}}
                ],
            },
        }
    ],
    "hotels": [
        {
            "id": "h1",
            "name": "Grand Hyatt",
            "program_id": "hyatt",
            "brand_tier_id": "stale",
            "room_rate_per_night": 250,
            "rules": [
                {
                    "id": "r2",
                    "name": "",
                    "enabled": True,
                    "trigger": {"type": "milestone", "metric": "stay", "threshold": 2},
                    "reward": {"type": "points", "points": 500},
                }
            ],
        }
    ],
}


def test_load_sample_workspace(sample_workspace_path) -> None:
    workspace = StateStore(str(sample_workspace_path)).load()

    assert workspace is not None
    assert [program.id for program in workspace.programs] == ["marriott", "hyatt"]
    assert workspace.global_settings.tax_input_mode == "PRE_TAX_PLUS_RATE"
    assert workspace.fx_rates is None


def test_missing_file_loads_nothing(tmp_path) -> None:
    assert StateStore(str(tmp_path / "none.json")).load() is None


def test_unknown_version_is_ignored(tmp_path) -> None:
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"version": 99}), encoding="utf-8")
    assert StateStore(str(path)).load() is None


def test_malformed_file_raises(tmp_path) -> None:
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StateLoadError):
        StateStore(str(path)).load()


def test_save_then_load(tmp_path, sample_workspace_path) -> None:
    workspace = StateStore(str(sample_workspace_path)).load()
    store = StateStore(str(tmp_path / "nested" / "workspace.json"))

    store.save(workspace)

    assert store.load() == workspace
    assert list((tmp_path / "nested").iterdir()) == [tmp_path / "nested" / "workspace.json"]


def test_legacy_state_is_migrated(tmp_path) -> None:
    path = tmp_path / "legacy.json"
    path.write_text(json.dumps(LEGACY_STATE), encoding="utf-8")

    workspace = StateStore(str(path)).load()

    program = workspace.program("hyatt")
    assert program.settings.point_value.amount == pytest.approx(150)
    assert program.settings.voucher_enabled
    voucher = program.settings.vouchers[0]
    assert voucher.value_mode == "CASH"
    assert voucher.value_cash.amount == 300
    assert program.sub_brands[0].tier_id == "5x"

    reward = program.settings.rules[0].reward
    assert isinstance(reward, VoucherReward)
    assert reward.voucher_id == voucher.id

    hotel = workspace.hotel("h1")
    assert hotel.brand_tier_id == "5x"
    assert hotel.rate_post_tax.amount == 250
    assert hotel.rate_post_tax.currency == "USD"
    assert hotel.rate_pre_tax is None
    trigger = hotel.rules[0].trigger
    assert isinstance(trigger, MilestoneTrigger) and trigger.metric == "nights"

    assert workspace.global_settings.country_id == "us"
    assert workspace.global_settings.tax_rate == 0.1


def test_migrate_state_does_not_touch_input() -> None:
    raw = json.loads(json.dumps(LEGACY_STATE))
    migrate_state(raw)
    assert raw == LEGACY_STATE


def test_point_value_normalization() -> None:
    assert normalize_point_value(0.008) == pytest.approx(80)
    assert normalize_point_value(80) == 80
    assert normalize_point_value(0) == 0


def test_failed_replace_leaves_no_temp_file(tmp_path, sample_workspace_path, monkeypatch) -> None:
    workspace = StateStore(str(sample_workspace_path)).load()
    store = StateStore(str(tmp_path / "workspace.json"))

    def fail_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(state_store.os, "replace", fail_replace)
    with pytest.raises(OSError):
        store.save(workspace)

    assert list(tmp_path.iterdir()) == []
