"""API route definitions."""

import time
from fastapi import APIRouter, UploadFile, File, HTTPException
import logging

from ..models import (
    AnalyzeRequest,
    AnalyzeResponse,
    LabelAnalysisResult,
    ClaimEvaluationRequest,
    ClaimEvaluationResponse,
    ClaimResultModel,
    ClaimInfo,
    ClaimListResponse,
    SweetenerInfoModel,
    SweetenerListResponse,
    ErrorResponse,
    HealthResponse,
    BatchAnalysisResponse,
    BatchRowResult,
)
from ..services import (
    LabelAnalyzer,
    analysis_to_dict,
    fact_card_to_dict,
    evaluate_claims,
    CSVParser,
    BatchProcessor,
    SequentialBatchProcessor,
)
from ..services.claims import CLAIM_RULES
from ..knowledge import SWEETENER_TABLE, get_claim_education
from ..config import get_settings
from .. import __version__

logger = logging.getLogger(__name__)
router = APIRouter()

# Initialize services
analyzer = LabelAnalyzer()
csv_parser = CSVParser()
batch_processor = BatchProcessor()
sequential_processor = SequentialBatchProcessor()


@router.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Check API health."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        claim_rules=len(CLAIM_RULES)
    )


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
    },
    tags=["Analysis"]
)
async def analyze(request: AnalyzeRequest):
    """
    Analyze the OCR text of one label.

    Scopes the nutrition and ingredients zones, extracts nutrient values,
    classifies ingredients, gives a sugar verdict with warnings, and checks
    each declared or detected claim.
    """
    settings = get_settings()

    lines = [line for line in request.lines if line and line.strip()]
    if not lines:
        raise HTTPException(status_code=400, detail="At least one line of label text is required")
    if sum(len(line) for line in lines) > settings.max_label_chars:
        raise HTTPException(
            status_code=400,
            detail=f"Label text too long. Maximum is {settings.max_label_chars} characters."
        )

    try:
        analysis = analyzer.analyze(lines, claims=request.claims, branding_text=request.branding_text)
        return AnalyzeResponse(
            success=True,
            result=LabelAnalysisResult(**analysis_to_dict(analysis)),
            error=None
        )
    except Exception as e:
        logger.exception(f"Error analyzing label: {e}")
        return AnalyzeResponse(
            success=False,
            error=f"Error analyzing label: {str(e)}"
        )


@router.get("/claims", response_model=ClaimListResponse, tags=["Claims"])
async def list_claims():
    """List the claims that have a rule, with plain-language explanations where available."""
    claims = []
    for claim_rule in CLAIM_RULES:
        education = get_claim_education(claim_rule.name)
        claims.append(ClaimInfo(
            name=claim_rule.name,
            aliases=list(claim_rule.aliases),
            what_made_them_say=education.what_made_them_say if education else None,
            where_the_lie_is=education.where_the_lie_is if education else None,
            takeaway=education.takeaway if education else None,
        ))
    return ClaimListResponse(claims=claims)


@router.get("/sweeteners", response_model=SweetenerListResponse, tags=["Sweeteners"])
async def list_sweeteners():
    """List known sweeteners and polyols with their intake limits and gut effects."""
    return SweetenerListResponse(sweeteners=[
        SweetenerInfoModel(
            name=info.name,
            aliases=list(info.aliases),
            gi_band=info.gi_band,
            calories_per_gram=info.calories_per_gram,
            safety=info.safety.value,
            is_polyol=info.is_polyol,
            note=info.note,
            fact_card=fact_card_to_dict(info.name),
        )
        for info in SWEETENER_TABLE
    ])


@router.post(
    "/claims/evaluate",
    response_model=ClaimEvaluationResponse,
    tags=["Claims"]
)
async def evaluate(request: ClaimEvaluationRequest):
    """
    Evaluate claims against already scoped nutrition and ingredients text.

    Claims not in the rule set pass with a note recommending manual review.
    """
    try:
        results = evaluate_claims(
            request.nutrition_zone,
            request.ingredients_zone,
            request.claims,
            branding_text=request.branding_text,
        )
        return ClaimEvaluationResponse(
            success=True,
            results=[
                ClaimResultModel(claim=r.claim, verdict=r.verdict.value, reason=r.reason)
                for r in results
            ]
        )
    except Exception as e:
        logger.exception(f"Error evaluating claims: {e}")
        return ClaimEvaluationResponse(
            success=False,
            error=f"Error evaluating claims: {str(e)}"
        )


@router.post(
    "/batch",
    response_model=BatchAnalysisResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        500: {"model": ErrorResponse, "description": "Processing error"}
    },
    tags=["Analysis"]
)
async def analyze_batch(
    csv_file: UploadFile = File(..., description="CSV file with product label text"),
):
    """
    Analyze many product labels from a CSV file.

    CSV format:
    - Required columns: product_id, label_text
    - Optional columns: claims (separated by ";"), branding_text

    Example CSV:
    ```
    product_id,label_text,claims
    P1,"Total Sugars 12g
    Ingredients: Sugar, Wheat Flour, Honey",No added sugar
    P2,"Nutrition Information\\nProtein 8g\\nIngredients: Oats, Milk",High protein;Low fat
    ```

    Returns an analysis for each product.
    """
    start_time = time.time()
    settings = get_settings()

    filename = csv_file.filename or ""
    if not filename.lower().endswith(".csv"):
        raise HTTPException(status_code=400, detail="Upload must be a .csv file")

    # Read CSV file
    try:
        csv_content = (await csv_file.read()).decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(
            status_code=400,
            detail="CSV file must be UTF-8 encoded"
        )
    except Exception as e:
        logger.error(f"Failed to read CSV file: {e}")
        raise HTTPException(status_code=400, detail="Failed to read CSV file")

    # Parse and validate CSV
    csv_rows, csv_errors = csv_parser.parse(csv_content)

    if csv_errors and not csv_rows:
        # Critical errors - no valid rows
        error_messages = [f"Row {e.row_number}: {e.field} - {e.message}" for e in csv_errors[:5]]
        raise HTTPException(
            status_code=400,
            detail=f"CSV validation failed: {'; '.join(error_messages)}"
        )
    if not csv_rows:
        raise HTTPException(status_code=400, detail="CSV file has no product rows")

    if len(csv_rows) > settings.max_batch_size:
        raise HTTPException(
            status_code=400,
            detail=f"Too many products. Maximum batch size is {settings.max_batch_size} rows."
        )

    # Process batch
    try:
        if len(csv_rows) >= settings.parallel_batch_min:
            results = batch_processor.process_batch(csv_rows)
        else:
            results = sequential_processor.process_batch(csv_rows)
    except Exception as e:
        logger.exception(f"Batch processing error: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Batch processing failed: {str(e)}"
        )

    # Convert results to response models
    batch_results = []
    sugar_present = 0
    no_sugar = 0

    for r in results:
        if r["success"] and r["result"]:
            if r["result"]["verdict"] == "SUGAR_PRESENT":
                sugar_present += 1
            else:
                no_sugar += 1
            batch_results.append(BatchRowResult(
                product_id=r["product_id"],
                success=True,
                result=LabelAnalysisResult(**r["result"]),
                error=None
            ))
        else:
            batch_results.append(BatchRowResult(
                product_id=r["product_id"],
                success=False,
                result=None,
                error=r.get("error", "Unknown error")
            ))

    processing_time = int((time.time() - start_time) * 1000)
    logger.info(f"Batch of {len(csv_rows)} products analyzed ({processing_time}ms)")

    return BatchAnalysisResponse(
        success=True,
        total=len(csv_rows),
        completed=sum(1 for r in batch_results if r.success),
        sugar_present=sugar_present,
        no_sugar=no_sugar,
        results=batch_results,
        errors=[f"Row {e.row_number}: {e.field} - {e.message}" for e in csv_errors],
        processing_time_ms=processing_time
    )
