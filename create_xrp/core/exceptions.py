"""统一异常体系

所有业务异常继承 ScaffoldError，替代散落的 ValueError / RuntimeError。
安装编排器据 code 生成结构化失败结果，CLI 层据此输出友好提示。
"""

from __future__ import annotations


class ScaffoldError(Exception):
    """脚手架基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(ScaffoldError):
    """工具配置无效或项目配置文件无法写入"""

    code = "CONFIG_ERROR"


class ValidationError(ScaffoldError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class ModuleResolutionError(ScaffoldError):
    """模块名在注册表中不存在"""

    code = "MODULE_NOT_FOUND"

    def __init__(self, source: str) -> None:
        super().__init__(
            f'模块 "{source}" 不在注册表中，请改用 Git 仓库地址直接安装'
        )
        self.source = source


class ModuleFetchError(ScaffoldError):
    """模块仓库克隆失败"""

    code = "FETCH_ERROR"

    def __init__(self, url: str) -> None:
        super().__init__(f"模块克隆失败: {url}")
        self.url = url


class ManifestError(ScaffoldError):
    """module.json 缺失或内容无效"""

    code = "INVALID_MANIFEST"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class IncompatibleModuleError(ScaffoldError):
    """模块声明的框架与项目框架不兼容"""

    code = "INCOMPATIBLE_FRAMEWORK"


class MaterializeError(ScaffoldError):
    """模块文件复制失败（已复制的部分不回滚）"""

    code = "COPY_ERROR"


class NotAProjectError(ScaffoldError):
    """当前目录不是 scaffold-xrp 项目"""

    code = "NOT_A_PROJECT"


class ModuleNotInstalledError(ScaffoldError):
    """项目中未安装指定模块"""

    code = "MODULE_NOT_INSTALLED"

    def __init__(self, name: str) -> None:
        super().__init__(f'模块 "{name}" 未安装')
        self.name = name


class ExecutionError(ScaffoldError):
    """外部命令执行失败"""

    code = "EXECUTION_ERROR"
