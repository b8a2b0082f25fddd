"""
map_optimizer.py
----------------

MAP (Maximum A Posteriori) optimizer using Optax.

Gradient ascent on the log kernel of the Beta posterior. The search runs
over theta = logit(q), so every iterate maps back into (0, 1) and the
boundary is never evaluated; the argmax is unchanged by the
reparameterization because the kernel itself (not a density in theta)
is maximized.

MVP implementation:
- Defaults to SGD with momentum, but any Optax optimizer can be passed in.
- Starts at the posterior mean alpha / (alpha + beta) unless `init` is given.
- Loss is the negative log kernel divided by (alpha + beta - 2), so the
  curvature in theta is q(1 - q) <= 1/4 for any data size and one learning
  rate works across sample sizes.

Connections
-----------
- Registered as "optax" in betaquap.inference.mode.MODE_FINDERS.
- With the scaled loss, d loss / d theta = q - q*, so the final gradient
  magnitude is the distance to the closed-form mode.
"""

from __future__ import annotations

import logging
import math

import jax
import jax.numpy as jnp
import optax
from jax import lax

from betaquap.errors import ConvergenceError, InvalidParameter
from betaquap.inference.base import ModeFinder, ModeResult, check_interior_mode

logger = logging.getLogger(__name__)


class MAPOptimizer(ModeFinder):
    """
    MAP optimizer for the Beta kernel.

    Parameters
    ----------
    steps : int, default=2000
        Number of optimization steps.
    optimizer : optax.GradientTransformation, optional
        Optax optimizer to use. Default: SGD with momentum.

    Notes
    -----
    - Loss function = negative log kernel, scaled by 1 / (alpha + beta - 2).
    - Gradients computed with jax.grad; the loop runs inside lax.scan.
    """

    method = "optax"

    def __init__(
        self,
        steps: int = 2000,
        learning_rate: float = 1.0,
        momentum: float = 0.9,
        optimizer: optax.GradientTransformation | None = None,
        *,
        tol: float = 1e-5,
        track_history: bool = False,
        log_every: int = 10,
    ):
        """Create a MAP optimizer.

        Parameters
        ----------
        steps : int
            Number of optimization steps.
        learning_rate : float, optional
            Learning rate for the default optimizer (SGD with momentum).
        momentum : float, optional
            Momentum for the default optimizer (SGD with momentum).
        optimizer : optax.GradientTransformation | None
            Optax optimizer to use instead of the default.
        tol : float, optional
            Convergence tolerance on |q - q*| (the final gradient magnitude).
        track_history : bool, optional
            When True, record loss history during fitting for plotting.
        log_every : int, optional
            Record every N steps (also records the last step).
        """
        if steps <= 0:
            raise InvalidParameter(f"steps must be positive, got {steps}")
        if tol <= 0:
            raise InvalidParameter(f"tol must be positive, got {tol}")
        self.steps = int(steps)
        self.optimizer = optimizer or optax.sgd(
            learning_rate=learning_rate, momentum=momentum
        )
        self.tol = tol
        self.track_history = track_history
        self.log_every = max(1, int(log_every))
        # Exposed after maximize() when tracking is enabled
        self.loss_steps: list[int] = []
        self.loss_history: list[float] = []

    def maximize(
        self, alpha: float, beta: float, init: float | None = None
    ) -> ModeResult:
        """
        Maximize the Beta kernel with gradient ascent.

        Parameters
        ----------
        alpha, beta : float
            Posterior shape parameters, both > 1.
        init : float | None, optional
            Starting probability in (0, 1). Defaults to the posterior mean
            alpha / (alpha + beta), which sits on the same side of 0.5 as
            the mode for skewed posteriors.

        Returns
        -------
        ModeResult
            method="optax", iterations=steps.

        Raises
        ------
        NoInteriorMode
            If alpha <= 1 or beta <= 1.
        ConvergenceError
            If |q - q*| is still above tol after all steps.
        """
        check_interior_mode(alpha, beta)
        alpha, beta = float(alpha), float(beta)
        start = alpha / (alpha + beta) if init is None else float(init)
        if not 0.0 < start < 1.0:
            raise InvalidParameter(f"init must lie in (0, 1), got {start}")

        scale = alpha + beta - 2.0

        def loss_fn(theta):
            log_kernel = (alpha - 1.0) * jax.nn.log_sigmoid(theta) + (
                beta - 1.0
            ) * jax.nn.log_sigmoid(-theta)
            return -log_kernel / scale

        theta = jnp.asarray(math.log(start) - math.log1p(-start), dtype=jnp.float32)
        opt_state = self.optimizer.init(theta)

        def step(carry, _):
            theta, opt_state = carry
            loss, grad = jax.value_and_grad(loss_fn)(theta)  # auto-diff
            updates, opt_state = self.optimizer.update(grad, opt_state, theta)
            theta = optax.apply_updates(theta, updates)
            return (theta, opt_state), loss

        @jax.jit
        def run(theta, opt_state):
            return lax.scan(step, (theta, opt_state), xs=None, length=self.steps)

        (theta, _), losses = run(theta, opt_state)

        # clear any previous history
        if self.track_history:
            self.loss_steps.clear()
            self.loss_history.clear()
            for i in range(self.steps):
                if (i % self.log_every == 0) or (i == self.steps - 1):
                    self.loss_steps.append(i)
                    self.loss_history.append(float(losses[i]))

        final_grad = float(jnp.abs(jax.grad(loss_fn)(theta)))
        mode = float(jax.nn.sigmoid(theta))
        converged = bool(jnp.isfinite(theta)) and final_grad < self.tol
        logger.debug(
            "optax mode search: alpha=%s beta=%s mode=%.8f |grad|=%.3g steps=%d",
            alpha,
            beta,
            mode,
            final_grad,
            self.steps,
        )
        if not converged:
            raise ConvergenceError(
                f"MAPOptimizer did not converge after {self.steps} steps "
                f"(|grad|={final_grad:.3g}, tol={self.tol})"
            )
        return ModeResult(
            mode=mode, method=self.method, converged=True, iterations=self.steps
        )

    def get_history(self) -> tuple[list[int], list[float]]:
        """Return (steps, losses) recorded during the last tracked fit."""
        return self.loss_steps, self.loss_history
