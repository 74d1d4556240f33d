"""create-xrp - XRPL dApp 脚手架与模块管理工具"""

__version__ = "0.4.0"
