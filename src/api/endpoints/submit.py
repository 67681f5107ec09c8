from fastapi import APIRouter, Depends

from src.api.dependencies import get_submission_service, require_payment
from src.integrations.contracts.dark_pool import InvokeRequest
from src.integrations.policy.submission_service import SubmissionService

api = APIRouter()

ENTRYPOINT_KEY = "submit"
ENTRYPOINT_DESCRIPTION = (
    "Submit a private transaction to the dark pool. Your transaction will be queued and executed "
    "atomically in a batch with other transactions, preventing MEV attacks. Includes a 5% privacy "
    "premium on top of your transaction value."
)
INVOKE_PATH = f"/entrypoints/{ENTRYPOINT_KEY}/invoke"


@api.post(INVOKE_PATH, tags=["Entrypoints"], dependencies=[Depends(require_payment)])
async def invoke_submit(
    body: InvokeRequest,
    service: SubmissionService = Depends(get_submission_service),
):
    """
    Forward a paid submission to the dark pool backend.

    Business failures come back as 200 with output.success = false.
    """
    result = await service.submit(body.input)
    return result.to_dict()
