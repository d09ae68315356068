from __future__ import annotations

from tfutil.core.guard.policy import BYPASS_ENV_VAR
from tfutil.host.config import ResourceBlock
from tfutil.host.session import ProviderSession
from tfutil.providers.util.provider import UtilProvider

GUARD = "util_indestructible.guard"


def test_scenario_create_then_destroy_is_denied(make_session, store, guard):
    session = make_session()
    report = session.apply(guard(allow_destroy=False))
    assert not report.has_error()
    assert store.get(GUARD)["attributes"]["allow_destroy"] is False

    report = session.destroy()
    assert report.has_error()
    assert report.diagnostics[0].summary == "Destruction Not Allowed"
    assert store.get(GUARD) is not None


def test_scenario_update_allow_destroy_then_destroy(make_session, store, guard):
    session = make_session()
    session.apply(guard(allow_destroy=False))

    report = session.apply(guard(allow_destroy=True))
    assert report.outcome(GUARD).action == "update"
    assert store.get(GUARD)["attributes"]["allow_destroy"] is True

    report = session.destroy()
    assert not report.diagnostics
    assert report.outcome(GUARD).applied
    assert store.addresses() == []


def test_scenario_provider_bypass_warns_and_destroys(make_session, store, guard):
    session = make_session({"bypass_indestructible": True})
    session.apply(guard(allow_destroy=False, allow_bypass=True))

    report = session.destroy()
    assert not report.has_error()
    [warning] = report.diagnostics.warnings()
    assert warning.summary == "Bypassing Destroy Protection"
    assert store.get(GUARD) is None


def test_scenario_instance_refuses_provider_bypass(make_session, store, guard):
    session = make_session({"bypass_indestructible": True})
    session.apply(guard(allow_destroy=False, allow_bypass=False))

    report = session.destroy()
    assert report.has_error()
    assert store.get(GUARD) is not None


def test_scenario_environment_default_enables_bypass(store, guard):
    session = ProviderSession(UtilProvider("test", environ={BYPASS_ENV_VAR: "true"}), store)
    assert not session.configure(None)
    assert session.provider.config.bypass_indestructible is True

    session.apply(guard(allow_destroy=False))
    report = session.destroy()
    assert report.diagnostics.warnings()
    assert store.get(GUARD) is None


def test_environment_from_process_is_used(monkeypatch, store, guard):
    monkeypatch.setenv(BYPASS_ENV_VAR, "true")
    session = ProviderSession(UtilProvider("test"), store)
    session.configure({})
    assert session.provider.config.bypass_indestructible is True


def test_refresh_does_not_drift(make_session, store, guard):
    session = make_session()
    session.apply(guard(allow_destroy=False, protected_value={"a": [1, 2]}))
    before = store.snapshot()

    assert not session.refresh()
    assert not session.refresh()
    assert store.snapshot() == before


def test_second_apply_is_noop(make_session, guard):
    session = make_session()
    session.apply(guard(allow_destroy=False))
    [change] = session.plan(guard(allow_destroy=False))
    assert change.action == "noop"


def test_changing_protected_value_routes_through_guard(make_session, store, guard):
    session = make_session()
    session.apply(guard(protected_value="v1"))

    report = session.apply(guard(protected_value="v2"))
    outcome = report.outcome(GUARD)
    assert outcome.action == "replace"
    assert not outcome.applied
    assert report.diagnostics[0].summary == "Destruction Not Allowed"
    assert store.get(GUARD)["attributes"]["protected_value"] == "v1"


def test_replacement_proceeds_when_destroy_is_allowed(make_session, store, guard):
    session = make_session()
    session.apply(guard(allow_destroy=True, protected_value="v1"))

    report = session.apply(guard(allow_destroy=True, protected_value="v2"))
    assert report.outcome(GUARD).applied
    assert store.get(GUARD)["attributes"]["protected_value"] == "v2"


def test_setting_protected_value_first_time_updates_in_place(make_session, store, guard):
    session = make_session()
    session.apply(guard())
    report = session.apply(guard(protected_value="v1"))
    assert report.outcome(GUARD).action == "update"
    assert not report.has_error()


def test_removed_from_config_is_destroyed_through_guard(make_session, store, guard):
    session = make_session()
    session.apply(guard())

    report = session.apply({})
    assert report.outcome(GUARD).action == "delete"
    assert report.has_error()
    assert store.get(GUARD) is not None


def test_destroy_absent_target_is_noop(make_session):
    report = make_session().destroy(["util_indestructible.missing"])
    assert not report.diagnostics
    assert report.outcome("util_indestructible.missing").action == "noop"


def test_destroy_runs_in_reverse_creation_order(make_session, store):
    session = make_session()
    desired = {
        f"util_indestructible.{name}": ResourceBlock(
            type="util_indestructible", attributes={"allow_destroy": True}
        )
        for name in ("first", "second")
    }
    session.apply(desired)

    report = session.destroy()
    assert [o.address for o in report.outcomes] == [
        "util_indestructible.second",
        "util_indestructible.first",
    ]
    assert store.addresses() == []


def test_one_denied_guard_does_not_block_others(make_session, store):
    session = make_session()
    session.apply({
        "util_indestructible.open": ResourceBlock(type="util_indestructible", attributes={"allow_destroy": True}),
        "util_indestructible.locked": ResourceBlock(type="util_indestructible", attributes={}),
    })

    report = session.destroy()
    assert report.has_error()
    assert store.addresses() == ["util_indestructible.locked"]


def test_unknown_resource_type_is_reported(make_session, store):
    session = make_session()
    report = session.apply({"util_other.x": ResourceBlock(type="util_other", attributes={})})
    assert report.has_error()
    assert report.diagnostics[0].summary == "Unknown Resource Type"
    assert store.addresses() == []


def test_invalid_plan_persists_nothing(make_session, store, guard):
    session = make_session()
    report = session.apply(guard(allow_destroy="yes"))
    assert report.has_error()
    assert store.addresses() == []


def test_failed_provider_configure_keeps_resources_unconfigured(store, guard):
    session = ProviderSession(UtilProvider("test", environ={BYPASS_ENV_VAR: "true"}), store)
    diagnostics = session.configure({"bypass_indestructible": "yes"})
    assert diagnostics.has_error()

    session.apply(guard())
    report = session.destroy()
    assert report.has_error()
    assert store.get(GUARD) is not None
