"""
Emissions estimator.

Turns an (activity key, quantity) pair into an EmissionEstimate by asking the
Climatiq API for the CO2e figure of the activity's emission factor. When the
primary factor id is rejected as unprocessable, the activity's fallback factor
ids are tried in order.
"""

import logging
import math
from datetime import datetime, timezone
from numbers import Real
from typing import Any

from app.core.config import Config
from app.pydantic_models.estimate import EmissionEstimate
from app.services.estimators.climatiq_client import ClimatiqClient
from app.services.estimators.exceptions import (
    EstimationError,
    ExternalServiceError,
    InvalidInput,
    ServiceMisconfigured,
    UnsupportedActivity,
)
from app.services.registry import activity_registry
from app.services.registry.activity_registry import ActivityDefinition
from app.utils.constants import CLIMATIQ_DATA_VERSION

logger = logging.getLogger(__name__)


class EmissionEstimator:
    """
    Service for estimating CO2e emissions of a logged activity.

    Holds no per-call state; concurrent calls are independent.
    """

    def __init__(
        self,
        client: ClimatiqClient | None,
        data_version: str = CLIMATIQ_DATA_VERSION,
    ):
        """
        Initialize estimator.

        Args:
            client: Climatiq client, or None when no credential is configured
            data_version: Climatiq dataset version sent with every request
        """
        self.client = client
        self.data_version = data_version

    @classmethod
    def from_config(cls, config: Config, transport=None) -> "EmissionEstimator":
        """Build an estimator from application configuration and environment."""
        api_key = config.climatiq_api_key
        client = None
        if api_key:
            client = ClimatiqClient(
                api_key=api_key,
                base_url=config.climatiq_base_url,
                timeout=config.climatiq_timeout,
                transport=transport,
            )
        return cls(client, data_version=config.climatiq_data_version)

    async def calculate(self, activity_key: str, value: Any) -> EmissionEstimate:
        """
        Estimate emissions for an activity.

        Args:
            activity_key: Registered activity key, e.g. "car_petrol"
            value: Positive, finite quantity in the activity's unit

        Returns:
            EmissionEstimate with the co2e returned by the service

        Raises:
            EstimationError: one of InvalidInput, UnsupportedActivity,
                ServiceMisconfigured, ExternalAuthError, RateLimited,
                ExternalServiceError or Timeout
        """
        validate_inputs(activity_key, value)

        definition = activity_registry.lookup(activity_key)
        if definition is None:
            raise UnsupportedActivity(activity_key)

        if self.client is None:
            raise ServiceMisconfigured("Climatiq API key not configured")

        try:
            response = await self._attempt(definition, definition.primary_factor_id, value)
        except EstimationError as primary_error:
            if not self._should_try_fallbacks(primary_error, definition):
                raise primary_error.for_activity(activity_key)

            logger.info(
                f"Primary factor id failed for {activity_key}, trying "
                f"{len(definition.fallback_factor_ids)} fallbacks"
            )
            response = await self._attempt_fallbacks(definition, value)
            if response is None:
                raise primary_error.for_activity(activity_key) from None

        return self._build_estimate(response, definition, value)

    def build_payload(
        self, definition: ActivityDefinition, factor_id: str, value: float
    ) -> dict[str, Any]:
        """Build the /estimate request body for one factor id."""
        emission_factor = {
            "activity_id": factor_id,
            "data_version": self.data_version,
        }
        if definition.region:
            emission_factor["region"] = definition.region

        parameter = definition.parameter_name.value
        return {
            "emission_factor": emission_factor,
            "parameters": {
                parameter: value,
                f"{parameter}_unit": definition.unit,
            },
        }

    async def _attempt(
        self, definition: ActivityDefinition, factor_id: str, value: float
    ) -> dict[str, Any]:
        payload = self.build_payload(definition, factor_id, value)
        return await self.client.estimate(payload)

    async def _attempt_fallbacks(
        self, definition: ActivityDefinition, value: float
    ) -> dict[str, Any] | None:
        """Try each fallback factor id in order; return the first success."""
        for factor_id in definition.fallback_factor_ids:
            try:
                response = await self._attempt(definition, factor_id, value)
            except EstimationError as e:
                logger.info(
                    f"Fallback factor id {factor_id} failed for {definition.key}: "
                    f"{e.code} {e.message}"
                )
                continue
            logger.info(f"Success with fallback factor id: {factor_id}")
            return response
        return None

    @staticmethod
    def _should_try_fallbacks(
        error: EstimationError, definition: ActivityDefinition
    ) -> bool:
        return (
            isinstance(error, ExternalServiceError)
            and error.is_unprocessable
            and bool(definition.fallback_factor_ids)
        )

    @staticmethod
    def _build_estimate(
        response: dict[str, Any], definition: ActivityDefinition, value: float
    ) -> EmissionEstimate:
        co2e = response.get("co2e") if isinstance(response, dict) else None
        if not _is_number(co2e) or co2e < 0:
            raise ExternalServiceError(
                "External API error: response did not contain a valid co2e value"
            ).for_activity(definition.key)

        return EmissionEstimate(
            activity=definition.key,
            value=value,
            unit=definition.unit,
            co2e=co2e,
            timestamp=datetime.now(timezone.utc),
        )


def _is_number(value: Any) -> bool:
    if not isinstance(value, Real) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int beyond float range
        return False


def validate_inputs(activity_key: Any, value: Any) -> None:
    """
    Reject malformed input before any network call.

    Raises:
        InvalidInput: missing key or value, or value not a positive finite number
    """
    if not activity_key or not isinstance(activity_key, str) or value is None:
        raise InvalidInput("Activity and value are required")

    if not _is_number(value) or value <= 0:
        raise InvalidInput("Value must be a positive number")
