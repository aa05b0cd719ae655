"""
Donation & inventory ledger tests.
"""
import asyncio

import pytest

from services import ledger
from services.auth import Identity
from services.errors import NotFound, ValidationError


class TestRecordDonation:

    async def test_appends_log_and_credits_inventory(self, db, make_user):
        _, donor = await make_user("donor", blood_type="A-")
        await db.blood_inventory.insert_one({"id": "inv-a", "blood_type": "A-", "available_units": 5, "status": "Low"})

        result = await ledger.record_donation(db, donor, units=2, notes="Camp drive")

        log = result["donor"]["donation_log"]
        assert len(log) == 1
        assert log[0]["units"] == 2
        assert log[0]["notes"] == "Camp drive"
        assert result["donor"]["last_donation_date"] == log[0]["date"]
        assert result["inventory"] == {"blood_type": "A-", "available_units": 7}

        row = await db.blood_inventory.find_one({"blood_type": "A-"})
        assert row["available_units"] == 7
        assert row["status"] == "Low"

    async def test_creates_inventory_row_on_first_donation(self, db, make_user):
        _, donor = await make_user("donor", blood_type="B+")

        result = await ledger.record_donation(db, donor)

        assert result["inventory"] == {"blood_type": "B+", "available_units": 1}
        row = await db.blood_inventory.find_one({"blood_type": "B+"}, {"_id": 0})
        assert row["status"] == "Medium"
        assert row["id"]

    async def test_default_note(self, db, make_user):
        _, donor = await make_user("donor")
        result = await ledger.record_donation(db, donor, units=1, notes="")
        assert result["donor"]["donation_log"][0]["notes"] == "Recorded via dashboard"

    async def test_concurrent_donations_do_not_lose_credits(self, db, make_user):
        donors = [(await make_user("donor", blood_type="O-"))[1] for _ in range(5)]

        await asyncio.gather(*(ledger.record_donation(db, d, units=3) for d in donors))

        row = await db.blood_inventory.find_one({"blood_type": "O-"})
        assert row["available_units"] == 15

    async def test_requires_donor_profile(self, db, make_user):
        _, user = await make_user("user")
        with pytest.raises(NotFound, match="Donor profile not found"):
            await ledger.record_donation(db, user)
        assert await db.blood_inventory.count_documents({}) == 0

    @pytest.mark.parametrize("units", [0, -2])
    async def test_units_must_be_positive(self, db, make_user, units):
        _, donor = await make_user("donor")
        with pytest.raises(ValidationError):
            await ledger.record_donation(db, donor, units=units)


class TestDonorSelfService:

    async def test_set_availability_is_idempotent(self, db, make_user):
        _, donor = await make_user("donor")

        first = await ledger.set_availability(db, donor, False)
        second = await ledger.set_availability(db, donor, False)

        assert first["availability"] is False
        assert second["availability"] is False
        assert await ledger.get_availability(db, donor) == {"availability": False}

    async def test_availability_requires_profile(self, db):
        with pytest.raises(NotFound):
            await ledger.set_availability(db, Identity(id="missing", role="donor"), True)
        with pytest.raises(NotFound):
            await ledger.get_availability(db, Identity(id="missing", role="donor"))

    async def test_history_is_empty_then_in_insertion_order(self, db, make_user):
        _, donor = await make_user("donor")
        assert await ledger.get_history(db, donor) == []

        await ledger.record_donation(db, donor, units=1, notes="first")
        await ledger.record_donation(db, donor, units=2, notes="second")

        history = await ledger.get_history(db, donor)
        assert [h["notes"] for h in history] == ["first", "second"]
        assert [h["units"] for h in history] == [1, 2]

    async def test_history_requires_profile(self, db):
        with pytest.raises(NotFound):
            await ledger.get_history(db, Identity(id="missing", role="donor"))


class TestAdminInventory:

    async def test_verify_donor_sets_reputation(self, db, make_user):
        _, donor = await make_user("donor")
        verified = await ledger.verify_donor(db, donor.id)
        assert verified["reputation"] == 10

    async def test_verify_unknown_donor(self, db):
        with pytest.raises(NotFound):
            await ledger.verify_donor(db, "missing")

    async def test_set_inventory_units_upserts_and_overwrites(self, db):
        created = await ledger.set_inventory_units(db, "AB+", 12)
        assert created["available_units"] == 12

        updated = await ledger.set_inventory_units(db, "AB+", 3)
        assert updated["available_units"] == 3
        assert await db.blood_inventory.count_documents({"blood_type": "AB+"}) == 1

        rows = await ledger.list_inventory(db)
        assert [r["blood_type"] for r in rows] == ["AB+"]

    @pytest.mark.parametrize("blood_type,units", [(None, 1), ("A+", None), ("A+", -1), ("X", 1)])
    async def test_set_inventory_units_validation(self, db, blood_type, units):
        with pytest.raises(ValidationError):
            await ledger.set_inventory_units(db, blood_type, units)
