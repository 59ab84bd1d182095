"""Batch processing service for analyzing many product labels from a CSV upload."""

import csv
import io
import logging
from typing import Dict, List, Tuple, Optional, Any
from dataclasses import dataclass, field
from concurrent.futures import ProcessPoolExecutor, as_completed
import multiprocessing

from ..config import get_settings

logger = logging.getLogger(__name__)


@dataclass
class CSVRow:
    """Parsed and validated CSV row."""
    product_id: str
    label_text: str
    claims: List[str] = field(default_factory=list)
    branding_text: str = ""
    row_number: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for processing."""
        return {
            "product_id": self.product_id,
            "label_text": self.label_text,
            "claims": list(self.claims),
            "branding_text": self.branding_text,
        }


@dataclass
class CSVValidationError:
    """Error from CSV validation."""
    row_number: int
    field: str
    message: str


class CSVParser:
    """Parse and validate batch CSV files."""

    # Required columns
    REQUIRED_COLUMNS = {"product_id", "label_text"}

    # Optional columns
    OPTIONAL_COLUMNS = {"claims", "branding_text"}

    # All valid columns
    VALID_COLUMNS = REQUIRED_COLUMNS | OPTIONAL_COLUMNS

    def __init__(self):
        self.settings = get_settings()

    def parse(self, csv_content: str) -> Tuple[List[CSVRow], List[CSVValidationError]]:
        """
        Parse CSV content and return validated rows.

        Label text may span several lines inside a quoted cell; a literal "\\n"
        sequence is also read as a line break.

        Args:
            csv_content: CSV file content as string

        Returns:
            Tuple of (valid_rows, errors)
        """
        rows: List[CSVRow] = []
        errors: List[CSVValidationError] = []

        try:
            reader = csv.DictReader(io.StringIO(csv_content))

            if reader.fieldnames is None:
                errors.append(CSVValidationError(
                    row_number=0,
                    field="header",
                    message="CSV file is empty or has no header"
                ))
                return rows, errors

            # Normalize column names (lowercase, strip whitespace)
            fieldnames = [f.lower().strip() for f in reader.fieldnames]

            missing_required = self.REQUIRED_COLUMNS - set(fieldnames)
            if missing_required:
                errors.append(CSVValidationError(
                    row_number=0,
                    field="header",
                    message=f"Missing required columns: {', '.join(sorted(missing_required))}"
                ))
                return rows, errors

            # Warn about unknown columns (but don't fail)
            unknown_columns = set(fieldnames) - self.VALID_COLUMNS
            if unknown_columns:
                logger.warning(f"Unknown CSV columns will be ignored: {unknown_columns}")

            seen_ids = set()
            for row_num, row in enumerate(reader, start=2):  # 1-indexed, after the header
                normalized_row = {(k or "").lower().strip(): v for k, v in row.items()}

                product_id = (normalized_row.get("product_id") or "").strip()
                if not product_id:
                    errors.append(CSVValidationError(
                        row_number=row_num,
                        field="product_id",
                        message="Product id is required"
                    ))
                    continue
                if product_id in seen_ids:
                    errors.append(CSVValidationError(
                        row_number=row_num,
                        field="product_id",
                        message=f"Duplicate product id: '{product_id}'"
                    ))
                    continue

                label_text = (normalized_row.get("label_text") or "").replace("\\n", "\n").strip()
                if not label_text:
                    errors.append(CSVValidationError(
                        row_number=row_num,
                        field="label_text",
                        message="Label text is required"
                    ))
                    continue
                if len(label_text) > self.settings.max_label_chars:
                    errors.append(CSVValidationError(
                        row_number=row_num,
                        field="label_text",
                        message=f"Label text exceeds {self.settings.max_label_chars} characters"
                    ))
                    continue

                claims_str = normalized_row.get("claims") or ""
                claims = [c.strip() for c in claims_str.split(";") if c.strip()]

                seen_ids.add(product_id)
                rows.append(CSVRow(
                    product_id=product_id,
                    label_text=label_text,
                    claims=claims,
                    branding_text=(normalized_row.get("branding_text") or "").strip(),
                    row_number=row_num
                ))

        except csv.Error as e:
            errors.append(CSVValidationError(
                row_number=0,
                field="csv",
                message=f"CSV parsing error: {str(e)}"
            ))

        return rows, errors


# Worker function for multiprocessing (must be at module level)
def _process_single_label(row_data: Dict[str, Any]) -> Dict[str, Any]:
    """Analyze a single product label. Runs in a worker process."""
    from .analyzer import analyze_label, analysis_to_dict

    product_id = row_data["product_id"]
    try:
        analysis = analyze_label(
            row_data["label_text"],
            claims=row_data.get("claims") or [],
            branding_text=row_data.get("branding_text") or "",
        )
        return {
            "product_id": product_id,
            "success": True,
            "error": None,
            "result": analysis_to_dict(analysis),
        }
    except Exception as e:
        logger.exception(f"Error analyzing {product_id}: {e}")
        return {
            "product_id": product_id,
            "success": False,
            "error": f"Processing error: {str(e)}",
            "result": None
        }


class BatchProcessor:
    """Analyze multiple labels in parallel."""

    def __init__(self):
        self.settings = get_settings()

    def process_batch(
        self,
        csv_rows: List[CSVRow],
        max_workers: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Analyze a batch of products.

        Args:
            csv_rows: Validated CSV rows
            max_workers: Max parallel workers (defaults to config)

        Returns:
            List of result dicts in CSV order
        """
        if not csv_rows:
            return []

        if max_workers is None:
            max_workers = min(
                self.settings.max_workers,
                multiprocessing.cpu_count(),
                len(csv_rows)  # No point having more workers than items
            )

        work_items = [row.to_dict() for row in csv_rows]
        results = []

        if len(work_items) <= 1 or max_workers <= 1:
            return SequentialBatchProcessor().process_batch(csv_rows)

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                executor.submit(_process_single_label, item): item["product_id"]
                for item in work_items
            }

            for future in as_completed(futures):
                product_id = futures[future]
                try:
                    results.append(future.result())
                except Exception as e:
                    logger.exception(f"Worker error for {product_id}: {e}")
                    results.append({
                        "product_id": product_id,
                        "success": False,
                        "error": f"Worker error: {str(e)}",
                        "result": None
                    })

        # Restore CSV order
        order = {row.product_id: i for i, row in enumerate(csv_rows)}
        results.sort(key=lambda r: order.get(r["product_id"], len(order)))
        return results


class SequentialBatchProcessor:
    """
    Analyze a batch in the current process.

    Cheaper than a process pool for small batches and used by the API.
    """

    def __init__(self):
        self.settings = get_settings()

    def process_batch(self, csv_rows: List[CSVRow]) -> List[Dict[str, Any]]:
        """
        Analyze rows one after another.

        Args:
            csv_rows: Validated CSV rows

        Returns:
            List of result dicts in CSV order
        """
        return [_process_single_label(row.to_dict()) for row in csv_rows]
