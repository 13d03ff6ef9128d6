def get_header(custom_args: dict = None) -> dict:
    header = {
        'Accept': 'application/json'
    }

    if custom_args is not None:
        header.update(custom_args)
    return header


def env_flag(value) -> bool:
    """Reads '0'/'1' style flags from the environment."""
    if value is None or value == '':
        return False
    return bool(int(value))
