"""Exceptions raised while loading datasets, images and labels."""


class DetectionError(RuntimeError):
    """Base class for every error raised by the package."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidArgumentError(DetectionError):
    """An argument has a value that cannot be used."""

    def __init__(self, argument, message):
        super().__init__(message)
        self.argument = argument


class _FileError(DetectionError):
    def __init__(self, filename, message):
        super().__init__(message)
        self.filename = filename


class _DirectoryError(DetectionError):
    def __init__(self, directory, message):
        super().__init__(message)
        self.directory = directory


class ImageLoadError(_FileError):
    """A file could not be opened or decoded."""


class FileNameError(_FileError):
    """A file name does not follow the expected naming scheme."""


class LabelFormatError(_FileError):
    """A line of a label file does not match the label format."""


class InputDirectoryError(_DirectoryError):
    """An input directory cannot be read."""


class EmptyFolderError(_DirectoryError):
    """A directory holds no entries."""


class OutputDirectoryError(_DirectoryError):
    """An output directory cannot be used."""


class MissingDirectoryError(_DirectoryError):
    """A directory expected inside a dataset is missing."""


class ImageLabelMismatch(DetectionError):
    """An image and the label file paired with it do not correspond."""

    def __init__(self, image_filename, label_filename, message):
        super().__init__(message)
        self.image_filename = image_filename
        self.label_filename = label_filename


class ImageMaskMismatch(DetectionError):
    """Model images and masks do not correspond."""

    def __init__(self, image_filename, mask_filename, message):
        super().__init__(message)
        self.image_filename = image_filename
        self.mask_filename = mask_filename