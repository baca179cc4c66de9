REGISTRY_NAME = "AgriculturalTraceabilitySystem"
REGISTRY_VERSION = "1.0.0"

MAX_AREA = 1_000_000
MIN_AREA = 1
MAX_IMAGES = 10
MAX_QUANTITY = 1_000_000

# Fila única de RegistryState
REGISTRY_STATE_ID = 1
