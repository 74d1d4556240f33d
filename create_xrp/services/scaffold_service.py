"""项目脚手架服务 - 从模板仓库创建新项目

流程:
  1. 校验项目名，目标目录不能已存在
  2. 浅克隆模板仓库（失败即中止）
  3. 清理模板: 删除 .git 与 CLI 包，只保留所选框架的 web 应用，改写 package.json 名称
  4. 初始化项目配置 .scaffold-xrp.json
  5. 安装项目依赖（失败仅提示）
  6. 批量安装指定模块
  7. git init + 初始提交（失败仅提示）
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from create_xrp.core.config_store import ScaffoldConfigStore
from create_xrp.core.exceptions import ExecutionError, ValidationError
from create_xrp.core.models import Framework, PackageManager
from create_xrp.core.project import validate_project_name
from create_xrp.utils.file_io import load_json, save_json
from create_xrp.utils.fs import remove_tree
from create_xrp.utils.shell import CommandExecutor, get_executor, run_cmd

if TYPE_CHECKING:
    from create_xrp.services.installer import BatchInstallResult, ModuleInstaller

logger = logging.getLogger(__name__)

CLI_PACKAGE_DIR = Path("packages") / "create-xrp"
NUXT_APP_DIR = "web-nuxt"
INITIAL_COMMIT_MESSAGE = "Initial commit from create-xrp"


@dataclass
class ScaffoldRequest:
    """新项目创建请求"""

    project_name: str
    framework: Framework = Framework.NEXTJS
    package_manager: PackageManager = PackageManager.PNPM
    modules: list[str] = field(default_factory=list)
    parent_dir: Path = Path(".")

    @property
    def target_dir(self) -> Path:
        return Path(self.parent_dir).resolve() / self.project_name


@dataclass
class ScaffoldReport:
    """项目创建报告"""

    target_dir: Path
    steps: list[dict[str, str]] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    modules: BatchInstallResult | None = None

    def record(self, step: str, ok: bool, warning: str = "") -> None:
        self.steps.append({"step": step, "status": "done" if ok else "warning"})
        if not ok and warning:
            self.warnings.append(warning)


class ProjectScaffolder:
    """项目脚手架"""

    def __init__(
        self,
        installer: ModuleInstaller,
        template_repo: str,
        executor: CommandExecutor | None = None,
        config_file_name: str = ".scaffold-xrp.json",
    ) -> None:
        self.installer = installer
        self.template_repo = template_repo
        self.executor = executor or get_executor()
        self.config_file_name = config_file_name

    def create(self, request: ScaffoldRequest) -> ScaffoldReport:
        """创建项目

        Raises:
            ValidationError: 项目名不合法或目录已存在
            ExecutionError: 模板克隆失败
        """
        validate_project_name(request.project_name)
        target = request.target_dir
        if target.exists():
            raise ValidationError(f'目录 "{request.project_name}" 已存在')

        report = ScaffoldReport(target_dir=target)

        run_cmd(
            ["git", "clone", "--depth", "1", self.template_repo, str(target)],
            cwd=target.parent, label="克隆模板", executor=self.executor,
        )
        report.steps.append({"step": "clone_template", "status": "done"})

        report.record(
            "cleanup", self._cleanup_template(target, request),
            "部分模板清理步骤失败",
        )

        store = ScaffoldConfigStore(target, self.config_file_name)
        store.init(request.framework)
        report.steps.append({"step": "init_config", "status": "done"})

        pm = request.package_manager
        report.record(
            "install_dependencies",
            self._run_soft(pm.install_command(), target, "安装依赖"),
            f"依赖安装失败，可手动执行: cd {request.project_name} && {' '.join(pm.install_command())}",
        )

        if request.modules:
            report.modules = self.installer.install_many(
                store, request.modules, request.framework, pm,
            )
            report.steps.append({
                "step": "install_modules",
                "status": "done" if report.modules.success else "warning",
            })

        git_ok = (
            self._run_soft(["git", "init"], target, "git init")
            and self._run_soft(["git", "add", "."], target, "git add")
            and self._run_soft(
                ["git", "commit", "-m", INITIAL_COMMIT_MESSAGE], target, "git commit",
            )
        )
        report.record("git_init", git_ok, "git 仓库初始化失败，可手动初始化")

        logger.info("项目已创建: %s (%d 条警告)", target, len(report.warnings))
        return report

    def _run_soft(self, cmd: list[str], cwd: Path, label: str) -> bool:
        try:
            run_cmd(cmd, cwd=cwd, label=label, executor=self.executor)
        except ExecutionError as e:
            logger.warning("%s", e)
            return False
        return True

    def _cleanup_template(self, target: Path, request: ScaffoldRequest) -> bool:
        """清理模板仓库内容，返回是否全部成功"""
        try:
            remove_tree(target / ".git", ignore_errors=False)
            remove_tree(target / CLI_PACKAGE_DIR, ignore_errors=False)

            apps_dir = target / "apps"
            if request.framework is Framework.NEXTJS:
                remove_tree(apps_dir / NUXT_APP_DIR, ignore_errors=False)
            else:
                remove_tree(apps_dir / "web", ignore_errors=False)
                nuxt_dir = apps_dir / NUXT_APP_DIR
                if nuxt_dir.exists():
                    nuxt_dir.rename(apps_dir / "web")
                    self._set_package_name(apps_dir / "web" / "package.json", "web")

            self._set_package_name(target / "package.json", request.project_name)
        except (OSError, ValueError) as e:
            logger.warning("模板清理失败: %s", e)
            return False
        return True

    @staticmethod
    def _set_package_name(path: Path, name: str) -> None:
        data = load_json(path)
        if not isinstance(data, dict):
            return
        data["name"] = name
        save_json(path, data)
