"""End-to-end tests: config file -> loaders -> matcher -> output."""

import io
import json
from pathlib import Path

import pytest

from listing_matcher.config import load_config
from listing_matcher.main import main
from listing_matcher.pipeline import MatchPipeline
from tests.helpers import write_json_lines

REPO_ROOT = Path(__file__).resolve().parents[2]
EXAMPLE_CONFIG = REPO_ROOT / "config.example.yaml"

EXPECTED_TEXT = (
    "Canon_PowerShot_SD980_IS\n"
    " => Canon PowerShot SD980 IS 12MP Digital Camera\n"
    "Sony_Cyber-shot_DSC-W310\n"
    " => Sony Cyber-shot DSC-W310 12.1MP Digital Camera with 4x Wide Angle Zoom\n"
    "Canon_PowerShot_SD980\n"
    " => Canon PowerShot SD980 12MP (Silver)\n"
    "Samsung_TL240\n"
    " => Samsung TL240 14.2MP Digital Camera\n"
)


@pytest.fixture
def isolated(tmp_path, monkeypatch, clean_env, restore_root_logger):
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestExampleConfiguration:
    """Run the bundled example configuration against the bundled data."""

    def test_example_config_with_bundled_data(self, isolated, capsys):
        exit_code = main(["--config", str(EXAMPLE_CONFIG)])

        assert exit_code == 0
        assert capsys.readouterr().out == EXPECTED_TEXT

    def test_repeated_runs_are_identical(self, clean_env):
        app_config, env_config = load_config(EXAMPLE_CONFIG)
        outputs = []
        for _ in range(3):
            stream = io.StringIO()
            MatchPipeline(app_config, env_config, stream=stream).run_once()
            outputs.append(stream.getvalue())

        assert outputs[0] == EXPECTED_TEXT
        assert outputs.count(outputs[0]) == 3


class TestGeneratedCatalog:
    """Larger generated inputs exercising the claim and ordering rules together."""

    @pytest.fixture
    def catalog(self, tmp_path):
        brands = ["Sony", "Canon", "Nikon"]
        products = []
        listings = []
        for brand in brands:
            for number in range(10):
                model = f"{brand[0]}X{number}"
                products.append(
                    {"product_name": f"{brand}_Base_{model}", "manufacturer": brand, "family": "Base", "model": model}
                )
                products.append(
                    {"product_name": f"{brand}_Base_{model}_Pro", "manufacturer": brand, "family": "Base", "model": f"{model} Pro"}
                )
                listings.append({"title": f"{brand} Base {model} Pro kit", "manufacturer": brand})
                listings.append({"title": f"{brand} Base {model} body only", "manufacturer": f"{brand} Europe"})
                listings.append({"title": f"Case for {brand} Base {model}", "manufacturer": "CaseCo"})

        write_json_lines(tmp_path / "listings.txt", listings)
        write_json_lines(tmp_path / "products.txt", products)
        (tmp_path / "stop_words.txt").write_text("for\nkit\n", encoding="utf-8")
        config = tmp_path / "config.yaml"
        config.write_text(
            "inputs:\n"
            "  listings: listings.txt\n"
            "  products: products.txt\n"
            "  stop_words: stop_words.txt\n"
            "output:\n"
            "  format: jsonl\n"
            "  path: results.jsonl\n",
            encoding="utf-8",
        )
        return config

    def test_pro_models_claim_pro_listings(self, catalog, isolated):
        assert main(["--config", str(catalog)]) == 0

        records = [
            json.loads(line)
            for line in (catalog.parent / "results.jsonl").read_text(encoding="utf-8").splitlines()
        ]
        by_name = {record["product_name"]: record["listings"] for record in records}

        assert len(records) == 60
        # All 30 Pro products come first
        assert all(record["product_name"].endswith("_Pro") for record in records[:30])
        for brand in ("Sony", "Canon", "Nikon"):
            pro = by_name[f"{brand}_Base_{brand[0]}X3_Pro"]
            base = by_name[f"{brand}_Base_{brand[0]}X3"]
            assert [listing["title"] for listing in pro] == [f"{brand} Base {brand[0]}X3 Pro kit"]
            assert [listing["title"] for listing in base] == [f"{brand} Base {brand[0]}X3 body only"]

        claimed = [listing["title"] for listings in by_name.values() for listing in listings]
        assert len(claimed) == len(set(claimed)) == 60
        assert not any(title.startswith("Case for") for title in claimed)
