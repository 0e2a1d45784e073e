"""
Router: POST /evaluate
Parses and evaluates one expression; faults come back as 400 with CalcError.
"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from adapters.calculator import DefaultCalculator
from api.dependencies import get_calculator
from api.schemas import ErrorResponse, EvaluateRequest, EvaluateResponse

logger = logging.getLogger("letcalc.api")

router = APIRouter(prefix="/evaluate", tags=["evaluate"])


@router.post(
    "",
    response_model=EvaluateResponse,
    responses={400: {"model": ErrorResponse}},
)
def evaluate(
    body: EvaluateRequest,
    calculator: DefaultCalculator = Depends(get_calculator),
):
    result = calculator.evaluate(body.expression, body.variables)
    if result.error is not None or result.value is None or result.exact is None:
        logger.info("Evaluation of %r failed: %s", body.expression, result.error)
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(detail=result.error).model_dump(mode="json"),
        )
    return EvaluateResponse(
        expression=result.expression,
        value=result.value,
        exact=result.exact,
        steps=result.steps,
    )
