"""Bilingual event-log messages and the ambient event templates."""

from statusboard.services.telemetry.models import LocalizedMessage, Severity

BOOT = LocalizedMessage(en="INITIALIZING SYSTEM MONITOR...", zh="正在初始化系统监控...")
CONFIG_LOADED = LocalizedMessage(en="REMOTE CONFIGURATION LOADED.", zh="远程配置已加载。")
CONFIG_MISSING = LocalizedMessage(
    en="CONFIG NOT FOUND. ACTIVATING SIMULATION PROTOCOL.",
    zh="未找到配置。正在激活模拟协议。",
)
POLL_FAILED = LocalizedMessage(en="API CONNECTION ERROR: RETRYING...", zh="API 连接错误: 重试中...")
ADMIN_GRANTED = LocalizedMessage(en="ADMIN PRIVILEGES GRANTED", zh="管理员权限已授予")
ADMIN_TERMINATED = LocalizedMessage(en="ADMIN SESSION TERMINATED", zh="管理员会话已终止")
SERVICE_DEPLOYED = LocalizedMessage(en="SERVICE DEPLOYED", zh="服务已部署")
SERVICE_UPDATED = LocalizedMessage(en="SERVICE UPDATED", zh="服务已更新")
SERVICE_DECOMMISSIONED = LocalizedMessage(en="SERVICE DECOMMISSIONED", zh="服务已退役")

AMBIENT_EVENTS: tuple[tuple[LocalizedMessage, Severity], ...] = (
    (LocalizedMessage(en="Packets dropped in sector 7", zh="第7扇区丢包"), Severity.WARN),
    (LocalizedMessage(en="Handshake verified: node_alpha", zh="握手验证通过: node_alpha"), Severity.INFO),
    (LocalizedMessage(en="Coolant levels stable", zh="冷却液液位稳定"), Severity.INFO),
    (LocalizedMessage(en="Re-routing traffic via subnet B", zh="流量重路由至子网 B"), Severity.INFO),
    (LocalizedMessage(en="Ping spike detected in EU-CENTRAL", zh="检测到 EU-CENTRAL 延迟激增"), Severity.WARN),
    (LocalizedMessage(en="Encryption keys rotated", zh="加密密钥已轮换"), Severity.INFO),
    (LocalizedMessage(en="Cache flush initiated", zh="缓存刷新已启动"), Severity.INFO),
    (LocalizedMessage(en="CRITICAL: Packet loss > 5%", zh="严重警告: 丢包率 > 5%"), Severity.CRIT),
)
