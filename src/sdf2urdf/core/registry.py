"""Link-pose registry used for joint reparenting.

The registry maps each link name to the link's pose in the model frame. It
is filled while links are converted and only read once joints are
converted, which is why every link must be visited before any joint.
"""

import logging
from typing import Dict, Optional

from sdf2urdf.errors import MissingLinkError
from sdf2urdf.transforms import Pose

logger = logging.getLogger(__name__)


class LinkPoseRegistry:
    """Per-conversion mapping from link name to model-frame pose.

    Entries are never removed. Looking up a name that was not registered is
    an error; there is no fallback to a default pose.
    """

    def __init__(self):
        self._poses: Dict[str, Pose] = {}

    def register(self, name: str, pose: Pose) -> None:
        if name in self._poses:
            logger.warning("Link '%s' registered twice, keeping the later pose", name)
        self._poses[name] = pose

    def get(self, name: str) -> Optional[Pose]:
        return self._poses.get(name)

    def lookup(self, name: str, joint_name: Optional[str] = None) -> Pose:
        """Return the pose registered for *name*.

        Raises:
            MissingLinkError: If no link with that name was registered
        """
        pose = self._poses.get(name)
        if pose is None:
            raise MissingLinkError(name, joint_name)
        return pose

    def __contains__(self, name: str) -> bool:
        return name in self._poses

    def __len__(self) -> int:
        return len(self._poses)
