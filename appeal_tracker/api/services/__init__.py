# This file marks the services package for appeal business logic.
# Service classes hold validation and transition rules so routers stay transport-focused.
