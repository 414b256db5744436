import logging

from .api import ApiError

logger = logging.getLogger("sportsreg.client")


class ResourceState:
    """
    Loading / error / data triple shared by the composables.

    ``track`` wraps one API call: it flips ``is_loading`` around it and
    records the error message. Queries swallow the error into ``error``
    and return ``None``; mutations re-raise after recording it.
    """

    def __init__(self, data=None):
        self.data = data
        self.error = None
        self.is_loading = False

    def track(self, call, *args, reraise=False, store=True, **kwargs):
        self.is_loading = True
        self.error = None
        try:
            result = call(*args, **kwargs)
        except ApiError as e:
            self.error = e.status_message
            logger.warning(f"Client call {getattr(call, '__name__', call)} failed: {self.error}")
            if reraise:
                raise
            return None
        finally:
            self.is_loading = False

        if store:
            self.data = result
        return result

    def __repr__(self):
        return f"ResourceState(is_loading={self.is_loading}, error={self.error!r})"
