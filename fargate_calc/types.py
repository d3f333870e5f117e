# fargate_calc/types.py
from __future__ import annotations

from typing import NewType


# ID-шники / имена
NodeId = NewType("NodeId", str)
PodId = NewType("PodId", str)
InstanceType = NewType("InstanceType", str)
Namespace = NewType("Namespace", str)

# Ресурсы
CpuMillis = NewType("CpuMillis", int)    # milliCPU
MemoryMega = NewType("MemoryMega", int)  # MiB

# Деньги
UsdPerHour = NewType("UsdPerHour", float)
