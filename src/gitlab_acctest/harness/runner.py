"""Drive Terraform through the steps of a test case."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import tftest
from gitlab.exceptions import GitlabError

from gitlab_acctest.checks.base import CheckContext
from gitlab_acctest.checks.errors import CheckError
from gitlab_acctest.config.loader import env_config
from gitlab_acctest.config.schema import TerraformConfig
from gitlab_acctest.config.templates import terraform_header
from gitlab_acctest.core.state import TerraformState
from gitlab_acctest.harness.errors import AcceptanceTestError, StepError
from gitlab_acctest.harness.lock import WorkdirLock
from gitlab_acctest.harness.types import CaseResult, StepResult, StepStatus

if TYPE_CHECKING:
    from gitlab_acctest.config.schema import Config
    from gitlab_acctest.core import GitLabProvider
    from gitlab_acctest.harness.types import ProgressCallback, TestCase, TestStep

logger = logging.getLogger(__name__)

CONFIG_FILE = "main.tf"
STATE_FILE = "terraform.tfstate"


class AcceptanceRunner:
    """Runs a ``TestCase`` in a single Terraform working directory.

    Steps are applied in order against one state.  The first failing step
    stops the run; whatever was applied is then destroyed and the case's
    destroy check runs against the state captured just before destroy.
    """

    def __init__(
        self,
        provider: GitLabProvider,
        workdir: Path,
        terraform: TerraformConfig | None = None,
        config: Config | None = None,
    ) -> None:
        self.provider = provider
        self.workdir = Path(workdir)
        self.terraform = terraform or TerraformConfig()
        self.config = config
        self.ctx = CheckContext(provider=provider)

    @property
    def state_path(self) -> Path:
        return self.workdir / STATE_FILE

    def _write_config(self, step: TestStep) -> None:
        header = terraform_header(self.terraform.provider_source, self.terraform.provider_version)
        (self.workdir / CONFIG_FILE).write_text(header + step.config, encoding="utf-8")

    def _terraform(self) -> tftest.TerraformTest:
        return tftest.TerraformTest(
            str(self.workdir),
            binary=self.terraform.binary,
            env=self.provider.terraform_env(),
        )

    def _apply_step(self, tf: tftest.TerraformTest, index: int, step: TestStep) -> None:
        self._write_config(step)
        try:
            tf.apply()
        except tftest.TerraformTestError as exc:
            raise StepError(index, f"terraform apply failed: {exc}") from exc

        if step.check is not None:
            step.check(self.ctx, TerraformState.load_or_empty(self.state_path))

    def _init(self, tf: tftest.TerraformTest, index: int, step: TestStep) -> None:
        self._write_config(step)
        try:
            tf.setup()
        except tftest.TerraformTestError as exc:
            raise StepError(index, f"terraform init failed: {exc}") from exc

    def _destroy(self, tf: tftest.TerraformTest, case: TestCase, result: CaseResult) -> None:
        pre_destroy = TerraformState.load_or_empty(self.state_path)
        try:
            tf.destroy()
        except tftest.TerraformTestError as exc:
            result.destroy_error = f"terraform destroy failed: {exc}"
            logger.error("%s: %s", case.name, result.destroy_error)
            return
        result.destroyed = True
        logger.info("%s: destroyed", case.name)

        if case.check_destroy is None:
            return
        try:
            case.check_destroy(self.ctx, pre_destroy)
        except (CheckError, GitlabError) as exc:
            result.destroy_error = f"destroy check failed: {exc}"
            logger.error("%s: %s", case.name, result.destroy_error)

    def run(self, case: TestCase, *, progress: ProgressCallback | None = None) -> CaseResult:
        """Run *case* and return the per-step result.

        Without an explicit ``Config`` the pre-check sees the environment-only
        config.

        Raises:
            PreCheckError: If the case's pre-check rejects the config.
            AcceptanceTestError: If a step or the destroy check failed.
        """
        if case.pre_check is not None:
            case.pre_check(self.config or env_config())

        self.workdir.mkdir(parents=True, exist_ok=True)
        result = CaseResult(name=case.name)
        failure: Exception | None = None

        with WorkdirLock(self.workdir):
            tf = self._terraform()
            initialized = False
            try:
                for index, step in enumerate(case.steps, start=1):
                    started = False
                    try:
                        if step.skip is not None and step.skip(self.ctx):
                            logger.info("%s: step %d skipped", case.name, index)
                            result.steps.append(
                                StepResult(
                                    index=index,
                                    description=step.description,
                                    status=StepStatus.SKIPPED,
                                )
                            )
                            continue

                        if progress is not None:
                            progress(index, step, "start")
                        started = True
                        if not initialized:
                            self._init(tf, index, step)
                            initialized = True
                        self._apply_step(tf, index, step)
                    except (CheckError, StepError, GitlabError) as exc:
                        failure = exc
                        logger.error("%s: step %d failed: %s", case.name, index, exc)
                        result.steps.append(
                            StepResult(
                                index=index,
                                description=step.description,
                                status=StepStatus.FAILED,
                                message=str(exc),
                            )
                        )
                        break
                    finally:
                        if started and progress is not None:
                            progress(index, step, "done")

                    logger.info("%s: step %d passed", case.name, index)
                    result.steps.append(
                        StepResult(
                            index=index,
                            description=step.description,
                            status=StepStatus.PASSED,
                        )
                    )
            finally:
                if initialized:
                    self._destroy(tf, case, result)

        if failure is not None:
            raise AcceptanceTestError(result=result, message=str(failure)) from failure
        if result.destroy_error:
            raise AcceptanceTestError(result=result, message=result.destroy_error)
        return result
