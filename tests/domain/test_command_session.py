import uuid

import pytest

from smarthome.domain.command_session import (
    ACCESS_DENIED,
    GUEST_PROMPT,
    USER_PROMPT,
    CommandSession,
)
from smarthome.domain.session import SessionState

from conftest import (
    ALICE_EMAIL,
    ALICE_PASSWORD,
    BOB_EMAIL,
    BOB_PASSWORD,
    RecordingDeviceService,
)


def login(session: CommandSession, email: str = ALICE_EMAIL, password: str = ALICE_PASSWORD) -> str:
    return session.handle_line(f"LOGIN {email} {password}").response


class TestBanner:
    def test_welcome_lines(self, command_session):
        lines = command_session.welcome_lines()
        assert lines[0] == "Welcome to SmartHome Raw TCP Interface!"
        assert lines[1] == "Please LOGIN first."
        assert "TOGGLE <GUID>" in lines[2]

    def test_prompt_depends_on_auth_state(self, command_session, alice):
        assert command_session.prompt == GUEST_PROMPT
        login(command_session)
        assert command_session.prompt == USER_PROMPT


class TestLogin:
    def test_valid_login(self, command_session, alice):
        response = login(command_session)
        assert response == "Welcome alice! You are now logged in."
        assert command_session.state is SessionState.AUTHENTICATED
        assert command_session.user_id == alice.user.id

    def test_wrong_credentials_stay_guest(self, command_session, alice):
        response = login(command_session, password="wrong")
        assert response == "Invalid credentials."
        assert command_session.state is SessionState.GUEST
        assert command_session.user_id is None

    @pytest.mark.parametrize("line", ["LOGIN", f"LOGIN {ALICE_EMAIL}"])
    def test_missing_arguments(self, command_session, alice, line):
        result = command_session.handle_line(line)
        assert result.response == "Usage: LOGIN <email> <password>"
        assert command_session.state is SessionState.GUEST

    def test_lowercase_verb(self, command_session, alice):
        result = command_session.handle_line(f"login {ALICE_EMAIL} {ALICE_PASSWORD}")
        assert result.response.startswith("Welcome alice")

    def test_no_relogin_once_authenticated(self, command_session, alice, bob):
        login(command_session)
        response = login(command_session, BOB_EMAIL, BOB_PASSWORD)
        assert response == "Already logged in."
        assert command_session.user_id == alice.user.id


class TestAccessControl:
    @pytest.mark.parametrize("line", ["LIST", "TOGGLE 3fa85f64-5717-4562-b3fc-2c963f66afa6", "TOGGLE"])
    def test_guest_is_denied(self, command_session, alice, line):
        result = command_session.handle_line(line)
        assert result.response == ACCESS_DENIED
        assert result.terminate is False
        assert command_session.state is SessionState.GUEST


class TestList:
    def test_lists_only_owned_devices(self, command_session, alice, bob):
        login(command_session, BOB_EMAIL, BOB_PASSWORD)
        response = command_session.handle_line("LIST").response
        lines = response.splitlines()

        assert lines[0] == f"--- Devices for User {bob.user.id} ---"
        assert len(lines) == 3
        assert f"{bob.bulb.id} | Kitchen Lamp (Kitchen) [OFF]" in response
        assert f"{bob.sensor.id} | Kitchen Sensor (Kitchen) [TEMP: 21.0°C]" in response
        assert str(alice.bulb.id) not in response

    def test_bulb_state_shown_after_toggle(self, command_session, alice):
        login(command_session)
        command_session.handle_line(f"TOGGLE {alice.bulb.id}")
        response = command_session.handle_line("LIST").response
        assert f"{alice.bulb.id} | Kitchen Lamp (Kitchen) [ON]" in response

    def test_no_devices(self, command_session, user_service):
        user_service.register("carol", "carol@example.com", "pw")
        login(command_session, "carol@example.com", "pw")
        assert command_session.handle_line("LIST").response == "No devices found."

    def test_device_without_known_room(self, command_session, alice, device_service):
        orphan = device_service.add_device("Porch Light", uuid.uuid4(), "LightBulb", alice.user.id)
        login(command_session)
        response = command_session.handle_line("LIST").response
        assert f"{orphan.id} | Porch Light (No room) [OFF]" in response


class TestToggle:
    def test_toggle_off_to_on_and_back(self, command_session, alice, device_service):
        login(command_session)

        assert command_session.handle_line(f"TOGGLE {alice.bulb.id}").response == "Device state toggled."
        assert device_service.get_device_by_id_for_user(alice.bulb.id, alice.user.id).is_on is True

        assert command_session.handle_line(f"TOGGLE {alice.bulb.id}").response == "Device state toggled."
        assert device_service.get_device_by_id_for_user(alice.bulb.id, alice.user.id).is_on is False

    def test_toggle_notifies(self, command_session, alice, notifier):
        login(command_session)
        before = notifier.notifications
        command_session.handle_line(f"TOGGLE {alice.bulb.id}")
        assert notifier.notifications == before + 1

    def test_toggle_sensor(self, command_session, alice, device_service, notifier):
        login(command_session)
        before = notifier.notifications
        response = command_session.handle_line(f"TOGGLE {alice.sensor.id}").response
        assert response == "Device is not a lightbulb."
        assert device_service.get_temperature(alice.sensor.id, alice.user.id) == 21.0
        assert notifier.notifications == before

    def test_toggle_missing_device(self, command_session, alice):
        login(command_session)
        assert command_session.handle_line(f"TOGGLE {uuid.uuid4()}").response == "Device not found."

    def test_toggle_other_users_device(self, command_session, alice, bob, device_service):
        login(command_session)
        assert command_session.handle_line(f"TOGGLE {bob.bulb.id}").response == "Device not found."
        assert device_service.get_device_by_id_for_user(bob.bulb.id, bob.user.id).is_on is False

    def test_toggle_without_id(self, command_session, alice):
        login(command_session)
        assert command_session.handle_line("TOGGLE").response == "Error: Provide ID"

    def test_malformed_id_skips_lookup(self, user_service, device_service, room_service, alice):
        recording = RecordingDeviceService(device_service)
        session = CommandSession(users=user_service, devices=recording, rooms=room_service)
        login(session)

        assert session.handle_line("TOGGLE not-a-guid").response == "Error: Invalid GUID"
        assert recording.lookups == 0


class TestExitAndTermination:
    def test_exit_as_guest(self, command_session):
        result = command_session.handle_line("EXIT")
        assert result.response == "Goodbye."
        assert result.terminate is True
        assert command_session.state is SessionState.TERMINATED

    def test_exit_when_authenticated(self, command_session, alice):
        login(command_session)
        result = command_session.handle_line("exit")
        assert result.response == "Goodbye."
        assert result.terminate is True

    @pytest.mark.parametrize("line", ["", "   ", "\r\n", "\t\n"])
    def test_blank_line_terminates_without_response(self, command_session, line):
        result = command_session.handle_line(line)
        assert result.response is None
        assert result.terminate is True
        assert command_session.state is SessionState.TERMINATED

    def test_terminated_session_ignores_input(self, command_session, alice):
        command_session.handle_line("EXIT")
        result = command_session.handle_line(f"LOGIN {ALICE_EMAIL} {ALICE_PASSWORD}")
        assert result.response is None
        assert result.terminate is True
        assert command_session.user_id is None


class TestUnknownCommands:
    @pytest.mark.parametrize("line", ["DANCE", "logout", "TOGGLEX 1", "?"])
    def test_unknown_as_guest(self, command_session, line):
        result = command_session.handle_line(line)
        assert result.response == "Unknown command."
        assert result.terminate is False
        assert command_session.state is SessionState.GUEST

    def test_unknown_keeps_authentication(self, command_session, alice):
        login(command_session)
        assert command_session.handle_line("REBOOT").response == "Unknown command."
        assert command_session.state is SessionState.AUTHENTICATED
        assert command_session.user_id == alice.user.id


class TestServiceFailures:
    def test_failure_becomes_error_line(self, user_service, device_service, room_service, alice):
        failing = RecordingDeviceService(device_service, fail_with=RuntimeError("database is locked"))
        session = CommandSession(users=user_service, devices=failing, rooms=room_service)
        login(session)

        result = session.handle_line("LIST")

        assert result.response == "Error: database is locked"
        assert result.terminate is False
        assert session.state is SessionState.AUTHENTICATED

    def test_session_continues_after_failure(self, user_service, device_service, room_service, alice):
        failing = RecordingDeviceService(device_service, fail_with=RuntimeError("boom"))
        session = CommandSession(users=user_service, devices=failing, rooms=room_service)
        login(session)

        assert session.handle_line(f"TOGGLE {alice.bulb.id}").response == "Error: boom"
        assert session.handle_line("EXIT").response == "Goodbye."


class TestScenario:
    def test_bob_full_session(self, command_session, alice, bob, device_service):
        assert "Welcome bob" in login(command_session, BOB_EMAIL, BOB_PASSWORD)

        listing = command_session.handle_line("LIST").response
        assert str(bob.bulb.id) in listing
        assert str(alice.bulb.id) not in listing

        assert command_session.handle_line(f"TOGGLE {bob.bulb.id}").response == "Device state toggled."
        assert device_service.get_device_by_id_for_user(bob.bulb.id, bob.user.id).is_on is True

        result = command_session.handle_line("EXIT")
        assert result.response == "Goodbye."
        assert result.terminate is True
