import pytest

from ecomission.profile.models import User


def fund(store, points: int, lifetime: int = None):
    store.save_user(User(points=points, lifetime_points=points if lifetime is None else lifetime))


class TestAwardPoints:
    @pytest.mark.parametrize("amount", [0, 1, 30, 499, 2500])
    def test_increases_balance_lifetime_and_count(self, store, profile, amount):
        fund(store, 100, 400)
        user = profile.award_points(amount)
        assert user.points == 100 + amount
        assert user.lifetime_points == 400 + amount
        assert user.total_missions_completed == 1

    def test_recomputes_stage_and_persists(self, store, profile):
        fund(store, 490)
        profile.award_points(10)
        saved = store.load_user()
        assert saved.stage == "Flower"
        assert saved.points == 500

    def test_negative_amount_is_rejected(self, profile):
        with pytest.raises(ValueError):
            profile.award_points(-5)


class TestDeductPoints:
    def test_sufficient_balance(self, store, profile):
        fund(store, 100)
        user = profile.deduct_points(40)
        assert user.points == 60
        assert user.lifetime_points == 100
        assert store.load_user().points == 60

    def test_exact_balance(self, store, profile):
        fund(store, 40)
        assert profile.deduct_points(40).points == 0

    def test_insufficient_balance_changes_nothing(self, store, profile):
        fund(store, 30)
        assert profile.deduct_points(31) is None
        assert store.load_user().points == 30


class TestPurchase:
    def test_adds_item_and_charges(self, store, profile):
        fund(store, 300)
        user = profile.purchase("watering_can", 120)
        assert user.points == 180
        assert user.inventory == ["watering_can"]

    def test_same_item_twice_is_owned_once(self, store, profile):
        fund(store, 300)
        profile.purchase("hat", 100)
        user = profile.purchase("hat", 100)
        assert user.inventory == ["hat"]
        assert user.points == 100

    def test_insufficient_balance(self, store, profile):
        fund(store, 50)
        assert profile.purchase("hat", 100) is None
        user = store.load_user()
        assert user.points == 50
        assert user.inventory == []

    def test_spending_never_touches_lifetime(self, store, profile):
        fund(store, 0)
        profile.award_points(200)
        user = profile.purchase("scarf", 150)
        assert user.points <= user.lifetime_points
        assert user.lifetime_points == 200


def test_rename_trims(profile):
    assert profile.rename("  Mina ").name == "Mina"
    assert profile.get_user().name == "Mina"


def test_rename_rejects_blank(profile):
    with pytest.raises(ValueError):
        profile.rename("   ")


def test_reset_returns_fresh_user(store, profile):
    fund(store, 900)
    user = profile.reset()
    assert user.points == 0
    assert user.lifetime_points == 0
