"""Digit classifier network."""

import torch
from torch import nn

IMAGE_SIZE = 28


class CNN(nn.Module):  # type: ignore[misc]
    """Convolutional network for 28x28 single-channel digit samples.

    Two conv/pool blocks followed by two fully connected layers. Accepts
    ``[batch, 1, 28, 28]``, ``[batch, 28, 28]`` or flattened
    ``[batch, 784]`` inputs.

    Args:
        input_channels: Number of input channels (default: 1 for grayscale).
        output_size: Number of output classes (default: 10 digits).
    """

    def __init__(self, input_channels: int = 1, output_size: int = 10) -> None:
        """Initialise the CNN layers."""
        super().__init__()
        self.input_channels = input_channels
        self.output_size = output_size

        self.features = nn.Sequential(
            nn.Conv2d(input_channels, 32, kernel_size=3, padding=1),
            nn.ReLU(),
            nn.MaxPool2d(kernel_size=2, stride=2),
            nn.Conv2d(32, 64, kernel_size=3, padding=1),
            nn.ReLU(),
            nn.MaxPool2d(kernel_size=2, stride=2),
        )
        # 7x7 is the spatial dimension after two 2x2 pooling layers on a 28x28 input
        self.classifier = nn.Sequential(
            nn.Linear(64 * 7 * 7, 128),
            nn.ReLU(),
            nn.Linear(128, output_size),
        )

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        """Return class logits for a batch of samples."""
        if x.dim() == 2:
            x = x.view(x.size(0), self.input_channels, IMAGE_SIZE, IMAGE_SIZE)
        elif x.dim() == 3:
            x = x.unsqueeze(1)

        x = self.features(x)
        x = x.view(x.size(0), -1)
        return self.classifier(x)
