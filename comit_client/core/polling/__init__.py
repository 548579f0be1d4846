from .poller import PollConfig, SwapPoller, poll_until_state

__all__ = ["PollConfig", "SwapPoller", "poll_until_state"]
