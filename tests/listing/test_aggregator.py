"""Tests for src/listing/aggregator.py"""

from src.listing import group_products, locale_sort_key, parse_price


def flatten(grouped):
    return [(v.brand, v.name, v.sale_price, v.sorted_flavors())
            for variants in grouped.values() for v in variants]


class TestGrouping:
    def test_flavors_collapse_into_one_variant(self, mint_and_menta):
        grouped = group_products(mint_and_menta)
        assert flatten(grouped) == [("X", "A", "10.00", ["Menta", "Mint"])]

    def test_duplicate_flavor_deduplicated(self, make_record):
        grouped = group_products([make_record(flavor="Mint"), make_record(flavor="Mint", stock=1)])
        variant = grouped["X"][0]
        assert variant.flavors == {"Mint"}

    def test_price_string_forms_are_distinct_groups(self, make_record):
        # "10.00" and "10.0" are the same number but different keys
        grouped = group_products([
            make_record(flavor="Mint", sale_price="10.00"),
            make_record(flavor="Uva", sale_price="10.0"),
        ])
        assert len(grouped["X"]) == 2
        assert {v.sale_price for v in grouped["X"]} == {"10.00", "10.0"}

    def test_different_prices_split(self, make_record):
        grouped = group_products([
            make_record(flavor="Mint", sale_price="10.00"),
            make_record(flavor="Uva", sale_price="12.00"),
        ])
        assert [v.sorted_flavors() for v in grouped["X"]] == [["Mint"], ["Uva"]]

    def test_empty_input(self):
        assert group_products([]) == {}


class TestEligibility:
    def test_refilters_ineligible_records(self, make_record):
        grouped = group_products([
            make_record(flavor="Ok"),
            make_record(flavor="Zero", stock=0),
            make_record(flavor="Off", active=False),
            make_record(with_product=False),
        ])
        assert flatten(grouped) == [("X", "A", "10.00", ["Ok"])]

    def test_zero_stock_active_never_appears(self, make_record):
        assert group_products([make_record(stock=0, active=True)]) == {}

    def test_every_flavor_traces_to_eligible_record(self, make_record):
        records = [
            make_record(brand="B", name="N", flavor=f"F{i}", stock=i % 3, active=i % 2 == 0)
            for i in range(12)
        ]
        eligible = {r.product.flavor for r in records if r.is_eligible}

        grouped = group_products(records)
        flavors = {f for variants in grouped.values() for v in variants for f in v.flavors}

        assert flavors == eligible


class TestOrdering:
    def test_brands_sorted(self, make_record):
        grouped = group_products([
            make_record(brand="Zomo"),
            make_record(brand="Elf Bar"),
            make_record(brand="Ignite"),
        ])
        assert list(grouped) == ["Elf Bar", "Ignite", "Zomo"]

    def test_names_sorted_locale_aware(self, make_record):
        grouped = group_products([
            make_record(name="beta"),
            make_record(name="Álamo"),
            make_record(name="Alfa"),
        ])
        assert [v.name for v in grouped["X"]] == ["Álamo", "Alfa", "beta"]

    def test_same_name_sorted_by_numeric_price(self, make_record):
        grouped = group_products([
            make_record(sale_price="9.90"),
            make_record(sale_price="100.00"),
            make_record(sale_price="25.5"),
        ])
        assert [v.sale_price for v in grouped["X"]] == ["9.90", "25.5", "100.00"]

    def test_deterministic(self, make_record):
        records = [make_record(brand=b, name=n, flavor=f)
                   for b in ("B", "A") for n in ("y", "x") for f in ("2", "1")]
        assert flatten(group_products(records)) == flatten(group_products(list(reversed(records))))


class TestHelpers:
    def test_parse_price(self):
        assert parse_price("12.5") == 12.5
        assert parse_price(" 3 ") == 3.0

    def test_parse_price_invalid_is_zero(self):
        assert parse_price("abc") == 0.0
        assert parse_price("") == 0.0
        assert parse_price("nan") == 0.0

    def test_locale_sort_key_ignores_accents_and_case(self):
        assert locale_sort_key("Ébano")[0] == locale_sort_key("ebano")[0]
        assert sorted(["b", "A", "a"], key=locale_sort_key) == ["a", "A", "b"]
