"""
Tests for installation tracking, project progress, the consumption report,
dashboards and the public pages.
"""
from datetime import date
from decimal import Decimal

import pytest

from models import EnergyConsumption
from services.reporting_service import CO2_KG_PER_KWH, savings_series
from utils.billing_periods import BILLING_PERIODS, period_bounds


def _entry(entry_id, period, units):
    start, end = period_bounds(period)
    return EnergyConsumption(
        id=entry_id,
        period=period,
        period_start=start,
        period_end=end,
        units_consumed=Decimal(units),
        bill_amount=Decimal(units) * 5,
    )


@pytest.mark.unit
class TestSavingsSeries:
    def test_baseline_is_mean_of_all_entries_without_project(self):
        entries = [_entry(1, "Jan-Feb 2024", 400), _entry(2, "Mar-Apr 2024", 600)]
        points = savings_series(entries)
        assert [p.pre_solar for p in points] == [500.0, 500.0]
        assert [p.savings for p in points] == [100.0, 0.0]
        assert points[0].savings_percentage == 20.0
        assert [p.month for p in points] == ["Jan 2024", "Mar 2024"]

    def test_baseline_uses_periods_before_solar(self):
        entries = [
            _entry(1, "Jan-Feb 2024", 600),
            _entry(2, "Mar-Apr 2024", 600),
            _entry(3, "May-Jun 2024", 300),
            _entry(4, "Jul-Aug 2024", 240),
        ]
        points = savings_series(entries, solar_since=date(2024, 5, 15))
        assert all(p.pre_solar == 600.0 for p in points)
        assert points[-1].savings == 360.0
        assert points[-1].savings_percentage == 60.0

    def test_window_is_six_most_recent_in_order(self):
        start = BILLING_PERIODS.index("Jan-Feb 2024")
        entries = [_entry(i, BILLING_PERIODS[start + i], 400 + i) for i in range(8)]
        entries.reverse()
        points = savings_series(entries)
        assert len(points) == 6
        assert [p.post_solar for p in points] == [402.0, 403.0, 404.0, 405.0, 406.0, 407.0]

    def test_deterministic(self):
        entries = [_entry(1, "Jan-Feb 2024", 420), _entry(2, "Mar-Apr 2024", 380)]
        assert savings_series(entries) == savings_series(entries)

    def test_no_entries(self):
        assert savings_series([]) == []


@pytest.fixture
def installed(client, voting_setup):
    """Voting ended on the first quote; returns the setup plus the project id."""
    client.post(
        f"/api/communities/voting/{voting_setup['request_id']}/votes",
        json={"provider_quote_id": voting_setup["quote_ids"][0]},
        headers=voting_setup["members"][1],
    )
    response = client.post(
        f"/api/communities/voting/{voting_setup['request_id']}/end",
        headers=voting_setup["admin"],
    )
    assert response.status_code == 200, response.text
    return {**voting_setup, "project_id": response.json()["project_id"]}


@pytest.mark.integration
class TestProjectProgress:
    def _patch(self, client, setup, headers, **body):
        return client.patch(f"/api/projects/{setup['project_id']}", json=body, headers=headers)

    def test_provider_advances_project(self, client, installed):
        provider = installed["providers"][0]
        response = self._patch(client, installed, provider, status="installation", progress_percentage=65)
        assert response.status_code == 200
        project = response.json()
        assert project["status"] == "installation"
        assert project["stage"] == 2
        assert project["progress_percentage"] == 65
        assert project["start_date"] == date.today().isoformat()

    def test_status_cannot_move_backward(self, client, installed):
        provider = installed["providers"][0]
        self._patch(client, installed, provider, status="procurement")
        response = self._patch(client, installed, provider, status="planning")
        assert response.status_code == 422

    def test_completed_forces_full_progress(self, client, installed):
        provider = installed["providers"][0]
        response = self._patch(client, installed, provider, status="completed", progress_percentage=80)
        assert response.json()["progress_percentage"] == 100

    def test_other_provider_forbidden(self, client, installed):
        response = self._patch(client, installed, installed["providers"][1], progress_percentage=10)
        assert response.status_code == 403

    def test_household_forbidden(self, client, installed):
        response = self._patch(client, installed, installed["admin"], progress_percentage=10)
        assert response.status_code == 403

    def test_progress_out_of_range(self, client, installed):
        response = self._patch(client, installed, installed["providers"][0], progress_percentage=120)
        assert response.status_code == 422

    def test_tracking_empty_without_community(self, client, make_user):
        headers = make_user("loner@example.com")
        assert client.get("/api/installation/tracking", headers=headers).json() == []


@pytest.mark.integration
class TestConsumptionReport:
    def test_report(self, client, make_user, make_community, energy_entries):
        headers = make_user("asha@example.com")
        community = make_community(headers)
        client.post(
            "/api/energy/input",
            json={"community_id": community["id"], "entries": energy_entries(6)},
            headers=headers,
        )

        report = client.get("/api/energy/consumption", headers=headers).json()
        assert report["community_name"] == community["name"]
        assert report["consumption"][0]["period"] == "Nov-Dec 2024"
        assert report["consumption"][-1]["period"] == "Jan-Feb 2024"
        assert len(report["savings"]) == 6
        assert report["savings"][0]["month"] == "Jan 2024"
        assert report["total_saved"] == pytest.approx(sum(p["savings"] for p in report["savings"]))
        assert report["co2_avoided_kg"] == pytest.approx(report["total_saved"] * CO2_KG_PER_KWH, abs=0.01)

    def test_empty_report(self, client, make_user):
        headers = make_user("loner@example.com")
        report = client.get("/api/energy/consumption", headers=headers).json()
        assert report["consumption"] == []
        assert report["savings"] == []
        assert report["total_saved"] == 0.0


@pytest.mark.integration
class TestDashboards:
    def test_user_dashboard(self, client, voting_setup, energy_entries):
        member = voting_setup["members"][1]
        client.post(
            "/api/energy/input",
            json={"community_id": voting_setup["community"]["id"], "entries": energy_entries(6, units=100, amount=500)},
            headers=member,
        )
        client.post(
            f"/api/communities/voting/{voting_setup['request_id']}/votes",
            json={"provider_quote_id": voting_setup["quote_ids"][0]},
            headers=member,
        )

        body = client.get("/api/dashboard", headers=member).json()
        [community] = body["communities"]
        assert community["member_count"] == 7
        assert community["role"] == "member"
        [open_request] = body["open_quote_requests"]
        assert open_request["id"] == voting_setup["request_id"]
        assert open_request["has_voted"] is True
        assert body["energy"]["entries"] == 6
        assert body["energy"]["total_units"] == pytest.approx(100 * 6 + 10 * 15)

    def test_provider_dashboard(self, client, voting_setup, energy_entries):
        client.post(
            "/api/energy/input",
            json={"community_id": voting_setup["community"]["id"], "entries": energy_entries(6, units=100, amount=500)},
            headers=voting_setup["admin"],
        )
        body = client.get("/api/provider/dashboard", headers=voting_setup["providers"][0]).json()
        [opportunity] = body["quote_requests"]
        assert opportunity["members"] == 7
        assert opportunity["has_quoted"] is True
        assert opportunity["zip_code"] == "600001"
        assert opportunity["total_consumption"] == pytest.approx(750.0)
        assert body["active_projects"] == []

    def test_provider_dashboard_lists_projects(self, client, installed):
        body = client.get("/api/provider/dashboard", headers=installed["providers"][0]).json()
        assert body["quote_requests"] == []
        [project] = body["active_projects"]
        assert project["id"] == installed["project_id"]
        assert body["completed_projects"] == []

    def test_provider_dashboard_refuses_households(self, client, make_user):
        headers = make_user("asha@example.com")
        assert client.get("/api/provider/dashboard", headers=headers).status_code == 403


@pytest.mark.integration
class TestPages:
    def test_about(self, client):
        body = client.get("/api/about").json()
        assert body["title"] == "About Ray Unity"
        assert [v["title"] for v in body["core_values"]] == ["Community First", "Transparency", "Sustainability"]
        assert body["stats"]["communities"] == 0

    def test_how_it_works(self, client):
        body = client.get("/api/how-it-works").json()
        assert [s["step"] for s in body["steps"]] == [1, 2, 3, 4, 5]
        assert len(body["faq"]) == 4

    def test_unknown_route(self, client):
        response = client.get("/api/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {"error": "Route not found"}
