"""Default authored species and starter gear.

Plain dicts so the same shape can come from a JSON file through
``SpeciesCatalog.from_dicts``.
"""

DEFAULT_SPECIES = (
    {
        "species_id": "perch",
        "display_name": "Perch",
        "size_min": 10.0,
        "size_max": 50.0,
        "age_min": 1.0,
        "age_max": 12.0,
        "optimal_age": 4.0,
        "base_quality_norm": 0.4,
        "base_rarity_norm": 0.2,
        "spawn_weight": 6.0,
        "price_scale": 1.0,
    },
    {
        "species_id": "pike",
        "display_name": "Pike",
        "size_min": 30.0,
        "size_max": 130.0,
        "age_min": 1.0,
        "age_max": 20.0,
        "optimal_age": 7.0,
        "base_quality_norm": 0.55,
        "base_rarity_norm": 0.45,
        "spawn_weight": 3.0,
        "price_scale": 1.4,
    },
    {
        "species_id": "salmon",
        "display_name": "Atlantic Salmon",
        "size_min": 50.0,
        "size_max": 120.0,
        "age_min": 2.0,
        "age_max": 8.0,
        "optimal_age": 4.0,
        "base_quality_norm": 0.75,
        "base_rarity_norm": 0.6,
        "spawn_weight": 1.5,
        "price_scale": 2.2,
    },
    {
        "species_id": "golden_carp",
        "display_name": "Golden Carp",
        "size_min": 25.0,
        "size_max": 90.0,
        "age_min": 3.0,
        "age_max": 40.0,
        "optimal_age": 15.0,
        "base_quality_norm": 0.85,
        "base_rarity_norm": 0.95,
        "spawn_weight": 0.2,
        "price_scale": 5.0,
    },
)

DEFAULT_RODS = (
    {"rod_id": "starter_rod", "display_name": "Bamboo Rod"},
    {
        "rod_id": "carbon_rod",
        "display_name": "Carbon Rod",
        "min_fishing": 20,
        "min_strength": 15,
        "fishing_bonus": 0.05,
        "strength_bonus": 0.1,
    },
)

DEFAULT_LURES = (
    {"lure_id": "starter_lure", "display_name": "Worm"},
    {"lure_id": "spinner", "display_name": "Silver Spinner", "spawn_bias": 0.15},
)

STARTING_ROD_ID = "starter_rod"
STARTING_LURE_ID = "starter_lure"
