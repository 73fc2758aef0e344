# tests/test_affinity.py
# Purpose:
# Wood/context scoring, recipe ranking for a person, and the affinity bump.
from barcart_backend.app.schemas import HistoryEntry, PersonProfile, Recipe, SmokedInfo, Wood
from barcart_backend.app.services.learning.affinity import (
    bump_wood_affinity,
    rank_recipes_for_person,
    rank_woods_for_context,
    score_recipe_for_person,
    score_wood_for_context,
)

def _hickory(in_kit=True):
    return Wood(
        name="Hickory",
        intensity="bold",
        best_with_drink_tags=["whiskey", "mezcal"],
        best_with_food_tags=["steak", "bbq"],
        avoid_with_drink_tags=["citrus"],
        is_in_my_kit=in_kit,
    )

def test_score_sums_every_term_and_joins_reasons():
    res = score_wood_for_context(
        _hickory(),
        meal_tags=["steak"],
        drink_tags=["whiskey", "citrus"],
        user_affinity={"Hickory": 3},
    )
    # Purpose: +2 drink, -3 avoid, +2 meal, +3 affinity, +1 in kit
    assert res.score == 5
    assert res.reason == "Matches drink style (whiskey). Pairs with meal (steak). Based on your history"

def test_not_in_kit_is_a_small_penalty():
    res = score_wood_for_context(_hickory(in_kit=False))
    assert res.score == -0.5
    assert res.reason == ""

def test_avoid_tags_add_no_reason():
    res = score_wood_for_context(_hickory(), drink_tags=["citrus"])
    assert res.score == -2
    assert res.reason == ""

def test_negative_affinity_counts_without_reason():
    res = score_wood_for_context(_hickory(), user_affinity={"Hickory": -2})
    assert res.score == -1
    assert "history" not in res.reason

def test_rank_woods_is_descending_and_stable(oak, alder):
    twin = oak.model_copy(update={"name": "Oak Twin"})
    ranked = rank_woods_for_context([alder, oak, twin], meal_tags=["steak"], drink_tags=["bourbon"])
    assert [w.name for w, _ in ranked] == ["Oak", "Oak Twin", "Alder"]
    assert ranked[0][1].score == 5

def test_rank_woods_empty():
    assert rank_woods_for_context([]) == []

def _r(name, *tags):
    return Recipe(id=name, name=name, category="alcoholic", tags=list(tags))

def test_recipe_score_terms():
    person = PersonProfile(sweetness_pref="dry", liked_tags=["smoky"], disliked_tags=["creamy"])
    assert score_recipe_for_person(_r("x", "bitter", "smoky"), person) == 3
    assert score_recipe_for_person(_r("y", "creamy"), person) == -2
    assert score_recipe_for_person(_r("z", "sweet"), person) == 0

def test_rank_recipes_for_person_order():
    person = PersonProfile(sweetness_pref="sweet", liked_tags=["tiki"], disliked_tags=["bitter"])
    recipes = [
        _r("A", "bitter"),          # -2
        _r("B", "fruity", "tiki"),  # 3
        _r("C"),                    # 0
        _r("D", "sweet"),           # 2
        _r("E"),                    # 0
    ]
    assert [r.name for r in rank_recipes_for_person(recipes, person)] == ["B", "D", "C", "E", "A"]

def test_rank_without_person_returns_same_object():
    recipes = [_r("A"), _r("B")]
    assert rank_recipes_for_person(recipes, None) is recipes

def test_bump_affinity_on_good_smoked_rating():
    entry = HistoryEntry(recipe_id="r1", rating=5, smoked=SmokedInfo(wood="Oak"))
    before = {"Oak": 1}
    after = bump_wood_affinity(before, entry, threshold=4)
    assert after == {"Oak": 2}
    assert before == {"Oak": 1}

def test_bump_affinity_ignores_low_unrated_or_unsmoked():
    low = HistoryEntry(recipe_id="r1", rating=3, smoked=SmokedInfo(wood="Oak"))
    unrated = HistoryEntry(recipe_id="r1", smoked=SmokedInfo(wood="Oak"))
    unsmoked = HistoryEntry(recipe_id="r1", rating=5)
    for entry in (low, unrated, unsmoked):
        assert bump_wood_affinity({}, entry, threshold=4) == {}

def test_bump_affinity_threshold_is_inclusive():
    entry = HistoryEntry(recipe_id="r1", rating=4, smoked=SmokedInfo(wood="Cherry"))
    assert bump_wood_affinity({}, entry, threshold=4) == {"Cherry": 1}
