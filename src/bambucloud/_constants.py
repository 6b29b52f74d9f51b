"""Internal constants for the Bambu Lab cloud API."""

from __future__ import annotations

API_BASE = "https://api.bambulab.com/v1"
API_BASE_CN = "https://api.bambulab.cn/v1"

USER_SERVICE = "user-service"
IOT_SERVICE = "iot-service"

MQTT_HOST = "us.mqtt.bambulab.com"
MQTT_HOST_CN = "cn.mqtt.bambulab.com"

# Paths relative to the service base URL
LOGIN_PATH = "user/login"
PROFILE_PATH = "my/profile"
TASKS_PATH = "my/tasks"
BIND_PATH = "api/user/bind"
TTCODE_PATH = "api/user/ttcode"

TASKS_PAGE_LIMIT = 500

CAMERA_URL_SCHEME = "bambu"

# Only RS256 credentials are accepted; the signature itself is not checked.
TOKEN_ALGORITHM = "RS256"
