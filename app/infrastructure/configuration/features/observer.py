"""Observer module feature settings."""

from pydantic import Field

from infrastructure.configuration.base import FeatureSettings


class ObserverFeatureSettings(FeatureSettings):
    """Simulated latencies for the observer showcase listeners.

    The listeners stand in for slow collaborators (mail server, warehouse,
    profile store, external system); each step sleeps for the configured
    number of seconds. Tests shrink these to keep the suite fast.

    Environment Variables:
        OBSERVER_EMAIL_DELAY_SECONDS: Email delivery latency (default: 0.5)
        OBSERVER_WAREHOUSE_DELAY_SECONDS: Warehouse notification latency (default: 0.3)
        OBSERVER_PROFILE_DELAY_SECONDS: Profile creation latency (default: 0.3)
        OBSERVER_EXTERNAL_SYSTEM_DELAY_SECONDS: External system latency (default: 0.4)
        OBSERVER_PREFERENCES_DELAY_SECONDS: Preference setup latency (default: 0.2)
    """

    email_delay_seconds: float = Field(
        default=0.5, alias="OBSERVER_EMAIL_DELAY_SECONDS", ge=0
    )
    warehouse_delay_seconds: float = Field(
        default=0.3, alias="OBSERVER_WAREHOUSE_DELAY_SECONDS", ge=0
    )
    profile_delay_seconds: float = Field(
        default=0.3, alias="OBSERVER_PROFILE_DELAY_SECONDS", ge=0
    )
    external_system_delay_seconds: float = Field(
        default=0.4, alias="OBSERVER_EXTERNAL_SYSTEM_DELAY_SECONDS", ge=0
    )
    preferences_delay_seconds: float = Field(
        default=0.2, alias="OBSERVER_PREFERENCES_DELAY_SECONDS", ge=0
    )
