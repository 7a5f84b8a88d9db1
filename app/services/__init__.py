"""
Service Organization
====================

**application/**
  Singleton services managed by ServiceContainer. One instance per application.
  Examples: CareService, PlantService, NotificationService, DashboardService

Services receive the requesting user's id on every call and never read the
Flask session themselves.
"""
