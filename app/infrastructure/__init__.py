"""Infrastructure modules for the observer showcase application.

Centralized infrastructure components:
- configuration: Settings management (Settings, EventExecutorSettings)
- logging: Structured logging (configure_logging, get_module_logger)
- events: Event system (EventDispatcher, ListenerRegistry, WorkerPool)
- services: Dependency injection services (SettingsDep, EventDispatcherDep, get_settings)
"""
