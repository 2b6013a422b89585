import json
from datetime import date

import polars as pl
import pytest

import main
from spend_ingest.models import AdRecord

ADS_CSV = (
    "Reporting ends,Campaign name,Delivery level,Amount spent (SGD)\n"
    "03/09/2025,Broad Reach,Campaign,2\n"
)
ORDERS_CSV = "Invoice Number,Creation Date,Paid Amount\nINV-1,03/09/2025,100\n"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for var in ("FX_SGD_TO_BDT", "SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


def test_dry_run_ingest_writes_normalized_csvs(tmp_path, capsys):
    ads = tmp_path / "ads.csv"
    orders = tmp_path / "orders.csv"
    ads.write_text(ADS_CSV)
    orders.write_text(ORDERS_CSV)
    out_dir = tmp_path / "out"

    code = main.main(
        ["--dry-run", "--rate", "90", "ingest", "--ads", str(ads), "--orders", str(orders), "--output", str(out_dir)]
    )

    assert code == 0
    result = json.loads(capsys.readouterr().out)
    assert result["ok"] is True
    assert result["date"] == "2025-09-03"
    assert result["stats"]["ads_inserted"] == 1

    ads_out = pl.read_csv(out_dir / "ads_norm.csv")
    assert ads_out["spend_bdt"].to_list() == [180.0]
    assert ads_out.columns[0] == "date"
    orders_out = pl.read_csv(out_dir / "orders_norm.csv")
    assert orders_out["order_id"].to_list() == ["INV-1"]


def test_missing_file_returns_error_code(tmp_path):
    code = main.main(["--dry-run", "ingest", "--ads", str(tmp_path / "nope.csv"), "--orders", str(tmp_path / "nope2.csv")])
    assert code == 1


def test_recompute_dry_run(capsys):
    code = main.main(["--dry-run", "recompute", "--date", "2025-09-03"])
    assert code == 0
    assert json.loads(capsys.readouterr().out) == {"ok": True, "runDate": "2025-09-03"}


def test_ingest_without_credentials_fails_cleanly(tmp_path):
    ads = tmp_path / "ads.csv"
    ads.write_text(ADS_CSV)
    code = main.main(["ingest", "--ads", str(ads), "--orders", str(ads)])
    assert code == 1


def test_shared_flags_accepted_after_subcommand(tmp_path, capsys):
    ads = tmp_path / "ads.csv"
    orders = tmp_path / "orders.csv"
    ads.write_text(ADS_CSV)
    orders.write_text(ORDERS_CSV)
    out_dir = tmp_path / "out"

    code = main.main(
        [
            "ingest", "--ads", str(ads), "--orders", str(orders),
            "--rate", "90", "--dry-run", "--output", str(out_dir), "--verbose",
        ]
    )

    assert code == 0
    assert json.loads(capsys.readouterr().out)["ok"] is True
    assert pl.read_csv(out_dir / "ads_norm.csv")["spend_bdt"].to_list() == [180.0]


def test_subcommand_keeps_top_level_flags():
    args = main.build_parser().parse_args(["--dry-run", "--rate", "80", "recompute"])
    assert args.dry_run is True
    assert args.rate == 80.0
    assert args.verbose is False

    args = main.build_parser().parse_args(["recompute", "--dry-run", "--date", "2025-09-03"])
    assert args.dry_run is True
    assert args.rate is None


def test_write_records_csv_late_optional_values(tmp_path):
    records = [AdRecord(date=date(2025, 9, 3), campaign_name=f"C{i}") for i in range(150)]
    records.append(
        AdRecord(date=date(2025, 9, 3), campaign_name="Late", impressions=1200.0, ctr_all=1.5, frequency=1.1)
    )
    path = tmp_path / "ads_norm.csv"

    main.write_records_csv(records, list(AdRecord.model_fields), path)

    out = pl.read_csv(path)
    assert out.height == 151
    assert out["impressions"].to_list()[-1] == 1200.0
    assert out["ctr_all"].null_count() == 150
