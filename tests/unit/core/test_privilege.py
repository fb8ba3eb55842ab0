"""Unit tests for administrator privilege detection."""

from unittest.mock import MagicMock, patch

from winprov.core.privilege import is_elevated


class TestIsElevated:
    """Tests for is_elevated."""

    def test_windows_admin(self) -> None:
        """IsUserAnAdmin returning non-zero means elevated."""
        mock_ctypes = MagicMock()
        mock_ctypes.windll.shell32.IsUserAnAdmin.return_value = 1

        with (
            patch("winprov.core.privilege.os") as mock_os,
            patch("winprov.core.privilege.ctypes", mock_ctypes),
        ):
            mock_os.name = "nt"
            assert is_elevated() is True

    def test_windows_not_admin(self) -> None:
        """IsUserAnAdmin returning zero means not elevated."""
        mock_ctypes = MagicMock()
        mock_ctypes.windll.shell32.IsUserAnAdmin.return_value = 0

        with (
            patch("winprov.core.privilege.os") as mock_os,
            patch("winprov.core.privilege.ctypes", mock_ctypes),
        ):
            mock_os.name = "nt"
            assert is_elevated() is False

    def test_windows_check_failure(self) -> None:
        """A failing API call is treated as not elevated."""
        mock_ctypes = MagicMock()
        mock_ctypes.windll.shell32.IsUserAnAdmin.side_effect = OSError("no shell32")

        with (
            patch("winprov.core.privilege.os") as mock_os,
            patch("winprov.core.privilege.ctypes", mock_ctypes),
        ):
            mock_os.name = "nt"
            assert is_elevated() is False

    def test_posix_root(self) -> None:
        """Effective uid 0 means elevated."""
        with patch("winprov.core.privilege.os") as mock_os:
            mock_os.name = "posix"
            mock_os.geteuid.return_value = 0
            assert is_elevated() is True

    def test_posix_user(self) -> None:
        """Any other uid means not elevated."""
        with patch("winprov.core.privilege.os") as mock_os:
            mock_os.name = "posix"
            mock_os.geteuid.return_value = 1000
            assert is_elevated() is False
