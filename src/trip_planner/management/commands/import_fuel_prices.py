from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Any

import polars as pl
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from trip_planner.models import FuelPrice


class Command(BaseCommand):
    help = "Import per-liter fuel prices from a CSV using Polars."

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument(
            "--csv-path",
            type=str,
            default=str(settings.PROJECT_ROOT / "fuel-prices.csv"),
            help="Path to a CSV with 'Fuel Type' and 'Price' columns",
        )
        parser.add_argument(
            "--replace",
            action="store_true",
            help="Delete existing prices before importing",
        )

    def handle(self, *_: Any, **options: Any) -> None:
        csv_path = Path(options["csv_path"])
        if not csv_path.exists():
            raise CommandError(f"CSV file does not exist: {csv_path}")

        frame = self._load_and_transform(csv_path)
        records = frame.to_dicts()
        if not records:
            raise CommandError("CSV contains no valid fuel prices")

        if options["replace"]:
            FuelPrice.objects.all().delete()

        existing = {
            price.fuel_type: price
            for price in FuelPrice.objects.filter(
                fuel_type__in=[row["fuel_type"] for row in records]
            )
        }

        to_create: list[FuelPrice] = []
        to_update: list[FuelPrice] = []

        for row in records:
            price = Decimal(str(round(row["price"], 3)))
            current = existing.get(row["fuel_type"])
            if current is None:
                to_create.append(FuelPrice(fuel_type=row["fuel_type"], price=price))
                continue

            current.price = price
            current.updated_at = timezone.now()
            to_update.append(current)

        if to_create:
            FuelPrice.objects.bulk_create(to_create)
        if to_update:
            FuelPrice.objects.bulk_update(to_update, ["price", "updated_at"])

        self.stdout.write(
            self.style.SUCCESS(
                f"Imported fuel prices: {len(records)} rows normalized, "
                f"{len(to_create)} created, {len(to_update)} updated"
            )
        )

    @staticmethod
    def _load_and_transform(csv_path: Path) -> pl.DataFrame:
        frame = pl.read_csv(csv_path, infer_schema_length=1000)
        required_columns = {"Fuel Type", "Price"}
        missing_columns = required_columns.difference(frame.columns)
        if missing_columns:
            raise CommandError(f"Missing expected columns: {sorted(missing_columns)}")

        # Duplicate fuel types keep the last listed price.
        return (
            frame.select(
                pl.col("Fuel Type")
                .cast(pl.Utf8, strict=False)
                .str.strip_chars()
                .fill_null("")
                .alias("fuel_type"),
                pl.col("Price").cast(pl.Float64, strict=False).alias("price"),
            )
            .filter(
                (pl.col("fuel_type").str.len_chars() > 0)
                & pl.col("price").is_not_null()
                & (pl.col("price") > 0)
            )
            .unique(subset=["fuel_type"], keep="last", maintain_order=True)
        )
