"""Deliberately vulnerable sample files for trying the analyzer."""

from .models import SourceFile


SAMPLE_JAVASCRIPT = """\
// Sample JavaScript file with deliberate vulnerabilities

function renderComment(userInput) {
  eval(userInput);

  const preview = <div dangerouslySetInnerHTML={{ __html: userInput }} />;
  document.getElementById('output').innerHTML = userInput;

  const password = "superSecretPassword123";

  console.log("Debug info:", userInput);
  // TODO: validate userInput before rendering
  return preview;
}
"""

SAMPLE_PYTHON = """\
# Sample Python file with deliberate vulnerabilities
import pickle
import subprocess


def unsafe_code():
    user_input = input("Enter some code: ")
    exec(user_input)

    data = pickle.loads(user_input.encode())

    name = input("Enter your name: ")
    print("Hello, " + name)

    subprocess.call("echo " + name, shell=True)
    return data
"""

SAMPLE_JAVA = """\
// Sample Java file with deliberate vulnerabilities
import java.io.IOException;

public class UnsafeCode {

    public void executeCommand(String userInput) throws IOException {
        Runtime.getRuntime().exec("cmd.exe /c " + userInput);
    }

    public void handleException() {
        try {
            throw new RuntimeException("Test exception");
        } catch (Exception e) {
            e.printStackTrace();
        }
    }

    public void printInfo(String message) {
        System.out.println(message);
    }

    public void checkObject(Object obj) {
        if (obj == null) {
            return;
        }
        if (obj != null) {
            System.out.println(obj.toString());
        }
    }
}
"""

# file type -> (file name, content)
SAMPLE_FILES: dict[str, tuple[str, str]] = {
    "js": ("test-vulnerable.js", SAMPLE_JAVASCRIPT),
    "py": ("test-vulnerable.py", SAMPLE_PYTHON),
    "java": ("test-vulnerable.java", SAMPLE_JAVA),
}


def generate_sample_file(file_type: str) -> SourceFile:
    """Build a sample file; unknown types get the JavaScript sample."""
    name, content = SAMPLE_FILES.get(file_type.lower(), SAMPLE_FILES["js"])
    return SourceFile(name=name, content=content.encode("utf-8"))
