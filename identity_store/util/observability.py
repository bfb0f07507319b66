"""Observability configuration using Logfire.

Repository operations open spans and log outcomes directly:

    import logfire

    with logfire.span("user_repository.save", user_id=str(user.id)):
        ...
"""

import logfire

from identity_store.config import Settings


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Priority for sending to Logfire cloud: explicit setting, then token
    presence, then console-only.

    Args:
        settings: Identity store settings
    """
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    elif settings.observability.logfire_token:
        send_to_logfire = True
    else:
        send_to_logfire = False

    config_kwargs = {
        "service_name": "identity-store",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )
