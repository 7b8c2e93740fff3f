from unittest.mock import patch
from mybiz_mailer.core.logging import setup_logging


def test_setup_logging_never_dumps_local_variables():
    with patch("mybiz_mailer.core.logging.logger") as mock_logger:
        setup_logging()

    mock_logger.remove.assert_called_once()
    assert mock_logger.add.call_args.kwargs["diagnose"] is False
