# Environment variable -> (config section, field)
# Add future overrides here
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "DOPPLER_ADDR": ("source", "address"),
    "CF_ACCESS_TOKEN": ("source", "auth_token"),
    "FIREHOSE_SUBSCRIPTION_ID": ("source", "subscription_id"),
    "STREAM_SOURCE": ("source", "kind"),
    "REPLAY_FILE": ("source", "replay_file"),
    "HOST": ("server", "host"),
    "PORT": ("server", "port"),
}
