# tests/test_batch_composer.py
# Purpose:
# Batch composition: count ranges, fallback cycling, rejection bookkeeping,
# kid toggles, targeting hints and the injectable shuffle.
import random
from datetime import datetime, timezone

from barcart_backend.app.schemas import BatchGenerationParams
from barcart_backend.app.services.drink_engine.batch_composer import generate_batch
from barcart_backend.app.services.rules_loader import BatchTables, CountRange

def _names(drinks):
    return [d.name for d in drinks]

def test_empty_catalog_is_padded_with_fallbacks():
    res = generate_batch([], BatchGenerationParams(include_kid_friendly=False))
    assert len(res.alcoholic) == 5
    assert len(res.mocktails_na) == 3
    assert res.kid_mocktails_na is None
    assert all(d.is_fallback for d in res.alcoholic + res.mocktails_na)
    assert all(d.fallback_reason == "Fallback template to meet count requirements" for d in res.alcoholic)
    assert res.validation_passed is True
    assert res.validation_errors is None
    # Purpose: templates are taken in order by current list length
    assert _names(res.alcoholic) == [
        "Classic Highball", "Vodka Soda", "Rum Punch", "Gin Tonic", "Tequila Sunrise",
    ]
    assert _names(res.mocktails_na) == [
        "Sparkling Citrus Refresher", "Berry Mint Spritz", "Tropical Sunset",
    ]

def test_empty_catalog_with_kids():
    res = generate_batch([], BatchGenerationParams(include_kid_friendly=True))
    assert _names(res.kid_mocktails_na) == ["Rainbow Fizz", "Strawberry Lemonade Slush"]
    assert res.validation_passed is True

def test_fallback_ids_are_fresh():
    res = generate_batch([], BatchGenerationParams())
    ids = [d.id for d in res.alcoholic + res.mocktails_na]
    assert len(set(ids)) == len(ids)
    assert all(i.startswith("gen_") for i in ids)

def test_large_catalog_takes_max_without_fallbacks(make_recipe):
    recipes = [make_recipe(category="alcoholic") for _ in range(10)]
    recipes += [make_recipe(category="mocktail", ingredients=("Lime Juice", "Club Soda")) for _ in range(10)]
    recipes += [make_recipe(category="kid-friendly", ingredients=("Apple Juice",)) for _ in range(10)]
    res = generate_batch(recipes, BatchGenerationParams(include_kid_friendly=True), rng=random.Random(3))
    assert len(res.alcoholic) == 6
    assert len(res.mocktails_na) == 4
    assert len(res.kid_mocktails_na) == 3
    assert not any(d.is_fallback for d in res.alcoholic + res.mocktails_na + res.kid_mocktails_na)
    assert all(d.source_recipe_id for d in res.alcoholic)
    assert res.validation_passed is True

def test_rejected_mocktail_is_not_replaced_and_fails_batch(make_recipe):
    good = make_recipe("Lime Fizz", category="mocktail", ingredients=("Lime Juice", "Club Soda"))
    bad = make_recipe("Sneaky Mule", category="mocktail", ingredients=("Vodka", "Ginger Syrup"))
    res = generate_batch([good, bad], BatchGenerationParams(), rng=random.Random(0))
    assert res.validation_errors == [
        'Rejected mocktail "Sneaky Mule": Contains alcoholic ingredient: Vodka'
    ]
    # Purpose: one accepted + fallbacks picked at index len % 4 → 1, 2
    assert _names(res.mocktails_na) == ["Lime Fizz", "Berry Mint Spritz", "Tropical Sunset"]
    assert res.validation_passed is False

def test_kid_caffeine_rejected_unless_allowed(make_recipe):
    cola = make_recipe("Cola Float", category="kid-friendly", ingredients=("Cola", "Vanilla Ice Cream"))
    strict = generate_batch([cola], BatchGenerationParams(include_kid_friendly=True))
    assert strict.validation_errors == [
        'Rejected kid mocktail "Cola Float": Contains caffeine: Cola'
    ]
    assert "Cola Float" not in _names(strict.kid_mocktails_na)
    assert len(strict.kid_mocktails_na) == 2

    relaxed = generate_batch(
        [cola],
        BatchGenerationParams(include_kid_friendly=True, allow_caffeine_in_kid_mocktails=True),
    )
    assert relaxed.validation_errors is None
    assert _names(relaxed.kid_mocktails_na)[0] == "Cola Float"
    assert relaxed.validation_passed is True

def test_kid_category_skipped_when_not_requested(make_recipe):
    spicy_kid = make_recipe(category="kid-friendly", ingredients=("Chili Mango",))
    res = generate_batch([spicy_kid], BatchGenerationParams(include_kid_friendly=False))
    assert res.kid_mocktails_na is None
    assert res.validation_errors is None
    assert res.validation_passed is True

def test_na_spirit_mocktail_is_accepted(make_recipe):
    r = make_recipe(
        "Garden Tonic",
        category="mocktail",
        ingredients=({"name": "Non-Alcoholic Gin", "isNASpirit": True}, "Tonic Water"),
    )
    res = generate_batch([r], BatchGenerationParams())
    assert _names(res.mocktails_na)[0] == "Garden Tonic"
    assert res.validation_passed is True

def test_fallback_cycle_repeats_when_templates_run_out():
    tiny = BatchTables(
        target_counts={
            "alcoholic": CountRange(4, 5),
            "mocktails_na": CountRange(1, 2),
            "kid_mocktails_na": CountRange(1, 1),
        },
        fallback_reason="padding",
        fallback_templates={
            "alcoholic": (
                {"name": "A", "category": "alcoholic"},
                {"name": "B", "category": "alcoholic"},
            ),
            "mocktails_na": ({"name": "M", "category": "mocktail"},),
            "kid_mocktails_na": ({"name": "K", "category": "kid-friendly"},),
        },
    )
    res = generate_batch([], BatchGenerationParams(), tables=tiny)
    assert _names(res.alcoholic) == ["A", "B", "A", "B"]
    assert len({d.id for d in res.alcoholic}) == 4
    assert res.alcoholic[0].fallback_reason == "padding"

def test_shuffle_is_injected_and_drawn_per_category(make_recipe, reverse_rng):
    recipes = [make_recipe(f"Alc {i}", category="alcoholic") for i in range(8)]
    res = generate_batch(recipes, BatchGenerationParams(include_kid_friendly=True), rng=reverse_rng)
    assert _names(res.alcoholic) == ["Alc 7", "Alc 6", "Alc 5", "Alc 4", "Alc 3", "Alc 2"]
    assert reverse_rng.calls == 3

def test_same_seed_same_batch(make_recipe):
    recipes = [make_recipe(f"Alc {i}", category="alcoholic") for i in range(12)]
    a = generate_batch(recipes, BatchGenerationParams(), rng=random.Random(42))
    b = generate_batch(recipes, BatchGenerationParams(), rng=random.Random(42))
    assert _names(a.alcoholic) == _names(b.alcoholic)

def test_exclude_tags_drop_candidates(make_recipe):
    recipes = [make_recipe(f"Smoky {i}", tags=["smoky"]) for i in range(6)]
    recipes += [make_recipe("Clean", tags=["light"])]
    res = generate_batch(recipes, BatchGenerationParams(exclude_tags=["smoky"]))
    assert "Clean" in _names(res.alcoholic)
    assert not any(n.startswith("Smoky") for n in _names(res.alcoholic))
    assert len(res.alcoholic) == 5

def test_preferred_tags_float_to_front(make_recipe):
    recipes = [make_recipe(f"Plain {i}") for i in range(8)]
    recipes += [make_recipe("Tiki A", tags=["tiki"]), make_recipe("Tiki B", tags=["Tiki"])]
    res = generate_batch(recipes, BatchGenerationParams(preferred_tags=["tiki"]), rng=random.Random(9))
    assert sorted(_names(res.alcoholic)[:2]) == ["Tiki A", "Tiki B"]
    assert len(res.alcoholic) == 6

def test_result_echoes_params_and_timestamp():
    params = BatchGenerationParams(occasion="birthday", include_kid_friendly=True)
    now = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    res = generate_batch([], params, now=now)
    assert res.params.occasion == "birthday"
    assert res.generated_at == "2026-01-02T03:04:05+00:00"

def test_count_invariant_holds_for_random_catalog_sizes(make_recipe):
    rng = random.Random(1234)
    for n in range(0, 9):
        recipes = [make_recipe(category=c) for c in ("alcoholic", "mocktail", "kid-friendly") for _ in range(n)]
        res = generate_batch(recipes, BatchGenerationParams(include_kid_friendly=True), rng=rng)
        assert 5 <= len(res.alcoholic) <= 6
        assert 3 <= len(res.mocktails_na) <= 4
        assert 2 <= len(res.kid_mocktails_na) <= 3
