"""
holiday_calendar
~~~~~~~~~~~~~~~~

按年维护的节假日时间表：先按每周固定休息日生成全年骨架，
再逐条叠加国务院放假安排（调休放假 / 法定假日 / 调休上班），
最终通过带 IP 白名单的 HTTP 服务对外提供查询。
"""

__version__ = "0.3.0"
