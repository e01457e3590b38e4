import os

from hypothesis import HealthCheck, settings

# HYPOTHESIS_PROFILE=ci for the long run in CI; "dev" keeps local runs quick
settings.register_profile("ci", max_examples=500, deadline=None)
settings.register_profile(
    "dev",
    max_examples=75,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
