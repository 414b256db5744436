from rest_framework.exceptions import ValidationError


def get_client_ip(request):
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR")


def get_user_agent(request):
    return request.META.get("HTTP_USER_AGENT")


def parse_int(value, default, minimum=0, maximum=None):
    """Lenient query-param int parsing used by the paginated readers."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    if number < minimum:
        return default
    if maximum is not None and number > maximum:
        return maximum
    return number


def parse_id_param(params, key, message="參數格式不正確"):
    """Optional integer id from the query string; a malformed value is a 400."""
    value = params.get(key)
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError({key: message})
